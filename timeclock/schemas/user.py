"""
User Schemas for admin user management
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from timeclock.core.enums import Role
from timeclock.core.timeutils import as_utc


class UserCreate(BaseModel):
    """PIN for employees, password for administrators"""
    email: EmailStr
    pin: str = Field(..., min_length=1)
    role: Role


class ResetPinRequest(BaseModel):
    new_pin: str = Field(..., min_length=1)


class User(BaseModel):
    """Public user representation, never exposes the credential hash"""
    model_config = ConfigDict(from_attributes=True)

    u_id: int
    u_email: str
    u_role: Role


class UserStatus(BaseModel):
    u_id: int
    u_email: str
    u_role: Role
    status: Literal["Clocked In", "Clocked Out", "Never Clocked In"]
    last_action_at: Optional[datetime] = None

    @field_validator('last_action_at', mode='before')
    @classmethod
    def ensure_utc(cls, v):
        if isinstance(v, datetime):
            return as_utc(v)
        return v
