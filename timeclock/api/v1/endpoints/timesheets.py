"""
Timesheet Endpoints - Weekly hours and clock event export
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from timeclock.db.session import get_db
from timeclock.services.timesheet_service import TimesheetService
from timeclock.schemas import DataResponse
from timeclock.api.deps import require_admin
from timeclock.api.exports import resolve_export_range, csv_response
from timeclock.core.config import settings
from timeclock.core.timeutils import current_week_start
from atams.encryption import encrypt_response_data

router = APIRouter()
timesheet_service = TimesheetService()


@router.get(
    "",
    status_code=status.HTTP_200_OK
)
async def get_weekly_timesheets(
    week_start_date: Optional[date] = Query(None, description="First day of the window, YYYY-MM-DD (default: this Monday, UTC)"),
    days: int = Query(7, ge=1, le=31, description="Number of days in the window"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Hours worked per employee per UTC day

    **Authorization:**
    - Requires admin bearer token

    **Response:**
    - One entry per employee with events in the window
    - daily_hours has exactly `days` entries, missing days are 0.0
    - total_hours is the sum of daily_hours
    """
    window_start = week_start_date or current_week_start()
    timesheets = timesheet_service.aggregate(db, window_start, days)

    response = DataResponse(
        success=True,
        message="Timesheets retrieved successfully",
        data=timesheets
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/export",
    status_code=status.HTTP_200_OK
)
async def export_timesheets(
    start_date: Optional[date] = Query(None, description="First day, YYYY-MM-DD"),
    end_date: Optional[date] = Query(None, description="Last day (inclusive), YYYY-MM-DD"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Download clock events as CSV

    Without dates the current UTC week is exported.

    **Errors:**
    - 400: Only one of start_date / end_date given, or end before start
    """
    start, end = resolve_export_range(start_date, end_date)
    content = timesheet_service.export_csv(db, start, end, actor_id=current_user["user_id"])
    return csv_response(content, "timesheet_export.csv")
