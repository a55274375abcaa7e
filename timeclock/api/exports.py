"""
Shared helpers for the CSV export endpoints
"""
from datetime import date, datetime, timedelta
from typing import Optional, Tuple
from fastapi import Response

from atams.exceptions import BadRequestException

from timeclock.core.timeutils import start_of_day


def resolve_export_range(
    start_date: Optional[date],
    end_date: Optional[date]
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """
    Turn inclusive calendar dates into a half-open UTC range

    Both None means "use the default range".
    """
    if start_date is None and end_date is None:
        return None, None
    if start_date is None or end_date is None:
        raise BadRequestException("Provide both start_date and end_date, or neither")
    if end_date < start_date:
        raise BadRequestException("end_date must not be before start_date")
    return start_of_day(start_date), start_of_day(end_date) + timedelta(days=1)


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
