"""
Auth Schemas for admin login
"""
from pydantic import BaseModel, Field

from timeclock.core.enums import Role


class AdminLoginRequest(BaseModel):
    # Plain str: the bootstrap admin lives on a special-use domain (system.local)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
    email: str
    role: Role
