"""
Audit Schemas for the admin dashboard
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, field_validator

from timeclock.core.timeutils import as_utc


class AuditLogEntry(BaseModel):
    al_id: int
    al_occurred_at: datetime
    al_action: str
    al_status: str
    user_email: str
    al_ip_address: Optional[str] = None
    al_details: Optional[str] = None

    @field_validator('al_occurred_at', mode='before')
    @classmethod
    def ensure_utc(cls, v):
        if isinstance(v, datetime):
            return as_utc(v)
        return v


class Notification(BaseModel):
    id: int
    message: str
    timestamp: datetime
