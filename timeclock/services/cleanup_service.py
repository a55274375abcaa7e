"""
Cleanup Service - Weekly purge of the clock event store
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from atams.logging import get_logger
from atams.transaction import transaction

from timeclock.repositories.clock_event_repository import ClockEventRepository
from timeclock.services.audit_service import AuditService
from timeclock.schemas.timesheet import WeeklyResetResult
from timeclock.core.locks import PurgeGate, purge_gate
from timeclock.core.enums import AuditAction, AuditStatus
from timeclock.core.exceptions import StorageFailureException

logger = get_logger(__name__)


class CleanupService:
    def __init__(self, gate: PurgeGate = None) -> None:
        self.event_repo = ClockEventRepository()
        self.audit_service = AuditService()
        self.gate = gate or purge_gate

    def weekly_reset(self, db: Session) -> WeeklyResetResult:
        """
        Delete every clock event

        Runs with clock actions excluded, so no clock-in can be half
        written across the purge. Audit entries are never deleted.

        Returns:
            WeeklyResetResult: Number of events removed
        """
        with self.gate.exclusive():
            try:
                with transaction(db):
                    deleted = self.event_repo.delete_all(db)
                    self.audit_service.stage(
                        db, None, AuditAction.WEEKLY_RESET_SUCCESS, AuditStatus.SUCCESS,
                        f"Weekly reset removed {deleted} clock events."
                    )
            except SQLAlchemyError as exc:
                logger.error("Weekly reset failed", exc_info=True)
                raise StorageFailureException("Failed to purge clock events") from exc

        logger.info("Weekly reset completed", extra={'extra_data': {'deleted_count': deleted}})
        return WeeklyResetResult(deleted_count=deleted, message=f"Weekly reset removed {deleted} clock events.")
