"""
Maintenance Endpoints - Scheduled purge of clock events
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from timeclock.db.session import get_db
from timeclock.services.cleanup_service import CleanupService
from timeclock.schemas import DataResponse, WeeklyResetResult
from timeclock.api.deps import require_admin

router = APIRouter()
cleanup_service = CleanupService()


@router.post(
    "/weekly-reset",
    response_model=DataResponse[WeeklyResetResult],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)]
)
def weekly_reset(
    db: Session = Depends(get_db)
):
    """
    Delete all clock events

    **Authorization:**
    - Requires admin bearer token

    **Use case:**
    - Called by an external scheduler every Monday 00:00 UTC
    - Blocks new clock actions until the purge has committed
    - Audit entries are kept
    """
    result = cleanup_service.weekly_reset(db)

    response = DataResponse(
        success=True,
        message="Weekly reset completed",
        data=result
    )

    return response
