"""
Clock Event Model - One row per kiosk clock-in / clock-out
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Float, Index
from sqlalchemy.sql import func
from atams.db import Base


class ClockEvent(Base):
    """Clock Event model for timeclock schema - Table: timeclock.clock_events"""
    __tablename__ = "clock_events"
    __table_args__ = (
        Index("ix_clock_events_user_occurred", "ce_user_id", "ce_occurred_at"),
        {"schema": "timeclock"},
    )

    ce_id = Column(BigInteger().with_variant(Integer(), "sqlite"), primary_key=True, index=True, autoincrement=True)
    ce_user_id = Column(BigInteger, nullable=False, index=True)  # Plain reference to users.u_id, survives user deletion
    ce_action = Column(String(10), nullable=False)  # 'CLOCK_IN' or 'CLOCK_OUT'
    ce_occurred_at = Column(DateTime(timezone=True), nullable=False, index=True)
    ce_session_id = Column(String(36), nullable=False, index=True)  # Pairs a CLOCK_IN with its CLOCK_OUT
    ce_duration_hours = Column(Float, nullable=True)  # Only set on CLOCK_OUT
    ce_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
