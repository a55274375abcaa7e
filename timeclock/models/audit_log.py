"""
Audit Log Model - Append-only trail of significant actions
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Text
from atams.db import Base


class AuditLog(Base):
    """Audit Log model for timeclock schema - Table: timeclock.audit_logs"""
    __tablename__ = "audit_logs"
    __table_args__ = {"schema": "timeclock"}

    al_id = Column(BigInteger().with_variant(Integer(), "sqlite"), primary_key=True, index=True, autoincrement=True)
    al_user_id = Column(BigInteger, nullable=True, index=True)  # Null for system / unattributable events
    al_action = Column(String(64), nullable=False)  # e.g. 'CLOCK_IN_SUCCESS', 'PIN_LOGIN_FAILURE'
    al_status = Column(String(10), nullable=False)  # 'SUCCESS' or 'FAILURE'
    al_ip_address = Column(String(64), nullable=True)
    al_occurred_at = Column(DateTime(timezone=True), nullable=False, index=True)
    al_details = Column(Text, nullable=True)
