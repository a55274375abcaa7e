"""
Attendance Schemas for the kiosk clock endpoint
"""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from timeclock.core.enums import ClockAction
from timeclock.core.timeutils import as_utc


class ClockRequest(BaseModel):
    """Request schema for kiosk clock endpoint"""
    pin: str = Field(..., min_length=1)


class ClockResponse(BaseModel):
    """Response schema for kiosk clock endpoint"""
    message: str
    user_email: str
    action: ClockAction
    timestamp: datetime
    session_id: str
    hours_worked_this_session: float = 0.0

    @field_validator('timestamp', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        """Stored timestamps are UTC, SQLite hands them back naive"""
        if isinstance(v, datetime):
            return as_utc(v)
        return v
