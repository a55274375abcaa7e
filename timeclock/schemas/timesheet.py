"""
Timesheet Schemas for weekly aggregation
"""
from typing import Dict, Optional
from pydantic import BaseModel


class WeeklyTimesheet(BaseModel):
    """Per-employee hours, daily_hours keyed by YYYY-MM-DD (UTC)"""
    user_id: int
    user_email: Optional[str] = None
    daily_hours: Dict[str, float]
    total_hours: float


class WeeklyResetResult(BaseModel):
    deleted_count: int
    message: str
