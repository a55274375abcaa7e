"""
Audit Service - Append-only audit trail, dashboard views and CSV export
"""
import csv
import io
from datetime import datetime
from typing import List, Optional, Dict, Iterable
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from atams.logging import get_logger
from atams.transaction import transaction

from timeclock.repositories.audit_log_repository import AuditLogRepository
from timeclock.repositories.user_repository import UserRepository
from timeclock.models.audit_log import AuditLog
from timeclock.models.user import User
from timeclock.schemas.audit import AuditLogEntry, Notification
from timeclock.services.action_resolver import display_name_from_email
from timeclock.core.enums import AuditAction, AuditStatus
from timeclock.core.exceptions import StorageFailureException
from timeclock.core.timeutils import utcnow, as_utc, isoformat_utc

logger = get_logger(__name__)

AUDIT_CSV_HEADERS = ["LogID", "Timestamp (UTC)", "UserEmail", "Action", "Status", "IP Address", "Details"]

_NOTIFICATION_TEMPLATES = {
    AuditAction.CLOCK_IN_SUCCESS.value: "{name} clocked in.",
    AuditAction.CLOCK_OUT_SUCCESS.value: "{name} clocked out.",
    AuditAction.ADMIN_LOGIN_SUCCESS.value: "{name} logged into the admin dashboard.",
}


class AuditService:
    """
    Two write paths:

    - log(): commits on its own. Used for failures, which must be kept
      even though nothing else from the request is written.
    - stage(): joins the caller's open transaction. Used for successes,
      which must become visible together with the change they describe.
    """

    def __init__(self) -> None:
        self.repo = AuditLogRepository()
        self.user_repo = UserRepository()

    def _entry_data(
        self,
        user_id: Optional[int],
        action: AuditAction,
        status: AuditStatus,
        details: str,
        ip_address: Optional[str]
    ) -> dict:
        return {
            "al_user_id": user_id,
            "al_action": action.value,
            "al_status": status.value,
            "al_details": details,
            "al_ip_address": ip_address,
            "al_occurred_at": utcnow(),
        }

    def stage(
        self,
        db: Session,
        user_id: Optional[int],
        action: AuditAction,
        status: AuditStatus,
        details: str,
        ip_address: Optional[str] = None
    ) -> AuditLog:
        """Add an audit entry to the caller's transaction (no commit)"""
        return self.repo.stage_entry(db, self._entry_data(user_id, action, status, details, ip_address))

    def log(
        self,
        db: Session,
        user_id: Optional[int],
        action: AuditAction,
        status: AuditStatus,
        details: str,
        ip_address: Optional[str] = None
    ) -> AuditLog:
        """
        Write an audit entry in its own transaction

        Raises:
            StorageFailureException: If the entry cannot be committed
        """
        try:
            with transaction(db):
                entry = self.repo.stage_entry(db, self._entry_data(user_id, action, status, details, ip_address))
            return entry
        except SQLAlchemyError as exc:
            logger.error(
                f"Failed to write audit entry {action.value}",
                exc_info=True,
                extra={'extra_data': {'action': action.value, 'status': status.value}}
            )
            raise StorageFailureException("Failed to write audit entry") from exc

    def _user_map(self, db: Session, logs: Iterable[AuditLog]) -> Dict[int, User]:
        user_ids = {log.al_user_id for log in logs if log.al_user_id is not None}
        return {u.u_id: u for u in self.user_repo.get_by_ids(db, user_ids)}

    def _to_entry(self, log: AuditLog, user_map: Dict[int, User]) -> AuditLogEntry:
        user_email = "System"
        if log.al_user_id is not None:
            user = user_map.get(log.al_user_id)
            user_email = user.u_email if user else "Unknown User"
        return AuditLogEntry(
            al_id=log.al_id,
            al_occurred_at=log.al_occurred_at,
            al_action=log.al_action,
            al_status=log.al_status,
            user_email=user_email,
            al_ip_address=log.al_ip_address,
            al_details=log.al_details
        )

    def get_audit_logs(self, db: Session, skip: int = 0, limit: int = 100) -> List[AuditLogEntry]:
        """Newest first, one user lookup for the whole page"""
        logs = self.repo.get_page(db, skip=skip, limit=limit)
        user_map = self._user_map(db, logs)
        return [self._to_entry(log, user_map) for log in logs]

    def count_audit_logs(self, db: Session) -> int:
        return self.repo.count_all(db)

    def get_notifications(self, db: Session, limit: int = 20) -> List[Notification]:
        logs = self.repo.find_recent(db, limit=limit)
        user_map = self._user_map(db, logs)
        return [self._to_notification(log, user_map) for log in logs]

    def _to_notification(self, log: AuditLog, user_map: Dict[int, User]) -> Notification:
        message = (log.al_details or "").strip() or "An unspecified action occurred."

        template = _NOTIFICATION_TEMPLATES.get(log.al_action)
        if template:
            name = "System"
            if log.al_user_id is not None:
                user = user_map.get(log.al_user_id)
                name = display_name_from_email(user.u_email) if user else "An unknown user"
            message = template.format(name=name)

        return Notification(id=log.al_id, message=message, timestamp=as_utc(log.al_occurred_at))

    def export_csv(
        self,
        db: Session,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        actor_id: Optional[int] = None
    ) -> str:
        """
        Render audit entries as CSV, header row first

        Without a range every entry is exported.
        """
        if start is not None and end is not None:
            logs = self.repo.find_in_range(db, as_utc(start), as_utc(end))
        else:
            logs = self.repo.find_all(db)

        user_map = self._user_map(db, logs)
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(AUDIT_CSV_HEADERS)
        for log in logs:
            user_email = "System"
            if log.al_user_id is not None:
                user = user_map.get(log.al_user_id)
                user_email = user.u_email if user else f"Unknown User (ID: {log.al_user_id})"
            writer.writerow([
                log.al_id,
                isoformat_utc(log.al_occurred_at),
                user_email,
                log.al_action,
                log.al_status,
                log.al_ip_address or "",
                log.al_details or ""
            ])

        self.log(
            db, actor_id, AuditAction.AUDIT_LOG_EXPORT, AuditStatus.SUCCESS,
            f"Audit logs exported ({len(logs)} rows)."
        )
        return buffer.getvalue()
