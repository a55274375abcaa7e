"""
User Model - Employees (kiosk PIN) and administrators (password)
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime
from sqlalchemy.sql import func
from atams.db import Base


class User(Base):
    """User model for timeclock schema - Table: timeclock.users"""
    __tablename__ = "users"
    __table_args__ = {"schema": "timeclock"}

    u_id = Column(BigInteger().with_variant(Integer(), "sqlite"), primary_key=True, index=True, autoincrement=True)
    u_email = Column(String(255), nullable=False, unique=True, index=True)
    u_role = Column(String(20), nullable=False, index=True)  # 'EMPLOYEE' or 'ADMIN'
    u_pin_hash = Column(String(255), nullable=False)  # bcrypt hash of PIN / admin password
    u_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    u_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
