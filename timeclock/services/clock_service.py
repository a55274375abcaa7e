"""
Clock Service - Kiosk PIN clock-in / clock-out flow
"""
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from atams.logging import get_logger
from atams.transaction import transaction

from timeclock.repositories.user_repository import UserRepository
from timeclock.repositories.clock_event_repository import ClockEventRepository
from timeclock.services.audit_service import AuditService
from timeclock.services.credential_matcher import CredentialMatcher
from timeclock.services.action_resolver import ActionResolver
from timeclock.schemas.attendance import ClockResponse
from timeclock.core.security import PinHasher
from timeclock.core.locks import KeyedLock, PurgeGate, employee_locks, purge_gate
from timeclock.core.enums import Role, ClockAction, AuditAction, AuditStatus
from timeclock.core.exceptions import (
    CredentialMismatchException,
    IdentityNotFoundException,
    StorageFailureException,
    KIOSK_FAILURE_MESSAGE,
)
from timeclock.core.timeutils import utcnow

logger = get_logger(__name__)


class ClockService:
    def __init__(
        self,
        hasher: PinHasher = None,
        locks: KeyedLock = None,
        gate: PurgeGate = None,
        resolver: ActionResolver = None
    ) -> None:
        self.user_repo = UserRepository()
        self.event_repo = ClockEventRepository()
        self.audit_service = AuditService()
        self.matcher = CredentialMatcher(hasher)
        self.resolver = resolver or ActionResolver()
        self.locks = locks or employee_locks
        self.gate = gate or purge_gate

    def clock(
        self,
        db: Session,
        pin: str,
        now: Optional[datetime] = None,
        ip_address: Optional[str] = None
    ) -> ClockResponse:
        """
        Process a kiosk PIN submission

        Args:
            db: Database session
            pin: Plaintext PIN
            now: Time of the action, defaults to the current UTC time
            ip_address: Kiosk address recorded on the audit entry

        Returns:
            ClockResponse: Resolved action and kiosk message

        Raises:
            CredentialMismatchException: No employee PIN matches
            IdentityNotFoundException: Matched employee deleted before the write
            StorageFailureException: Event and audit entry could not be committed
        """
        # 1. Identify the employee (linear scan, no PIN index exists)
        employees = self.user_repo.get_by_role(db, Role.EMPLOYEE)
        try:
            employee = self.matcher.match(pin, [(e, e.u_pin_hash) for e in employees])
        except CredentialMismatchException:
            logger.warning(
                "Kiosk PIN did not match any employee",
                extra={'extra_data': {'candidates': len(employees), 'ip_address': ip_address}}
            )
            self.audit_service.log(
                db, None, AuditAction.PIN_LOGIN_FAILURE, AuditStatus.FAILURE,
                "Failed PIN login attempt. No matching user found.", ip_address
            )
            raise

        user_id = employee.u_id
        email = employee.u_email

        # 2. Read last event, resolve and write, serialized per employee
        with self.locks.hold(user_id), self.gate.shared():
            try:
                with transaction(db):
                    if self.user_repo.get_for_update(db, user_id) is None:
                        raise IdentityNotFoundException(KIOSK_FAILURE_MESSAGE)

                    last_event = self.event_repo.latest_for(db, user_id)
                    resolved = self.resolver.resolve(user_id, email, last_event, now or utcnow())
                    self.event_repo.stage_event(db, resolved.to_event_data())

                    if resolved.action == ClockAction.CLOCK_IN:
                        self.audit_service.stage(
                            db, user_id, AuditAction.CLOCK_IN_SUCCESS, AuditStatus.SUCCESS,
                            "User clocked in via PIN-only kiosk.", ip_address
                        )
                    else:
                        self.audit_service.stage(
                            db, user_id, AuditAction.CLOCK_OUT_SUCCESS, AuditStatus.SUCCESS,
                            f"User clocked out. Hours worked: {resolved.duration_hours:.2f}", ip_address
                        )
            except IdentityNotFoundException:
                logger.warning(
                    "Matched employee no longer exists",
                    extra={'extra_data': {'user_id': user_id}}
                )
                self.audit_service.log(
                    db, user_id, AuditAction.CLOCK_ACTION_FAILURE, AuditStatus.FAILURE,
                    f"Clock action aborted, user {user_id} no longer exists.", ip_address
                )
                raise
            except SQLAlchemyError as exc:
                logger.error(
                    "Failed to commit clock action",
                    exc_info=True,
                    extra={'extra_data': {'user_id': user_id}}
                )
                raise StorageFailureException("Failed to record clock action") from exc

        logger.info(
            f"Clocked {resolved.action.value}",
            extra={'extra_data': {
                'user_id': user_id,
                'action': resolved.action.value,
                'session_id': resolved.session_id
            }}
        )

        return ClockResponse(
            message=resolved.message,
            user_email=email,
            action=resolved.action,
            timestamp=resolved.occurred_at,
            session_id=resolved.session_id,
            hours_worked_this_session=resolved.duration_hours or 0.0
        )
