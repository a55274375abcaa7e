"""
Audit Endpoints - Audit trail, dashboard notifications and export
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from timeclock.db.session import get_db
from timeclock.services.audit_service import AuditService
from timeclock.schemas import DataResponse, PaginationResponse
from timeclock.api.deps import require_admin
from timeclock.api.exports import resolve_export_range, csv_response
from timeclock.core.config import settings
from atams.encryption import encrypt_response_data

router = APIRouter()
audit_service = AuditService()


@router.get(
    "/audit-logs",
    status_code=status.HTTP_200_OK
)
async def get_audit_logs(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=settings.AUDIT_PAGE_MAX, description="Maximum records to return"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Get audit entries, newest first

    **Authorization:**
    - Requires admin bearer token

    **Response:**
    - user_email is "System" for entries without an actor
      and "Unknown User" when the actor was deleted
    """
    logs = audit_service.get_audit_logs(db, skip=skip, limit=limit)
    total = audit_service.count_audit_logs(db)

    response = PaginationResponse(
        success=True,
        message="Audit logs retrieved successfully",
        data=logs,
        total=total,
        page=skip // limit + 1,
        size=limit,
        pages=(total + limit - 1) // limit
    )

    return encrypt_response_data(response, settings)


@router.get(
    "/audit-logs/export",
    status_code=status.HTTP_200_OK
)
async def export_audit_logs(
    start_date: Optional[date] = Query(None, description="First day, YYYY-MM-DD"),
    end_date: Optional[date] = Query(None, description="Last day (inclusive), YYYY-MM-DD"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Download audit entries as CSV

    Without dates every entry is exported.

    **Errors:**
    - 400: Only one of start_date / end_date given, or end before start
    """
    start, end = resolve_export_range(start_date, end_date)
    content = audit_service.export_csv(db, start, end, actor_id=current_user["user_id"])
    return csv_response(content, "audit_log_export.csv")


@router.get(
    "/notifications",
    status_code=status.HTTP_200_OK
)
async def get_notifications(
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin)
):
    """
    Most recent audit entries as dashboard messages
    """
    notifications = audit_service.get_notifications(db, limit=settings.NOTIFICATION_LIMIT)

    response = DataResponse(
        success=True,
        message="Notifications retrieved successfully",
        data=notifications
    )

    return encrypt_response_data(response, settings)
