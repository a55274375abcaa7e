"""
User Service - Business logic for admin user management
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from atams.logging import get_logger
from atams.transaction import transaction
from atams.exceptions import (
    NotFoundException,
    BadRequestException,
    ConflictException,
)

from timeclock.repositories.user_repository import UserRepository
from timeclock.repositories.clock_event_repository import ClockEventRepository
from timeclock.services.audit_service import AuditService
from timeclock.services.credential_matcher import CredentialMatcher
from timeclock.schemas.user import User, UserCreate, UserStatus
from timeclock.core.config import settings
from timeclock.core.security import PinHasher
from timeclock.core.enums import Role, ClockAction, AuditAction, AuditStatus
from timeclock.core.exceptions import DuplicateCredentialException

logger = get_logger(__name__)

# bcrypt only accepts secrets up to 72 bytes
MAX_SECRET_BYTES = 72


class UserService:
    def __init__(self, hasher: PinHasher = None) -> None:
        self.repo = UserRepository()
        self.event_repo = ClockEventRepository()
        self.audit_service = AuditService()
        self.hasher = hasher or PinHasher()
        self.matcher = CredentialMatcher(self.hasher)

    def _validate_pin(self, pin: str, role: Role) -> None:
        if not pin or not pin.strip():
            raise BadRequestException("PIN must not be blank")
        if len(pin.encode("utf-8")) > MAX_SECRET_BYTES:
            raise BadRequestException(f"PIN or password must not exceed {MAX_SECRET_BYTES} bytes")
        if role != Role.EMPLOYEE:
            return
        if not settings.PIN_MIN_LENGTH <= len(pin) <= settings.PIN_MAX_LENGTH:
            raise BadRequestException(
                f"PIN must be between {settings.PIN_MIN_LENGTH} and {settings.PIN_MAX_LENGTH} characters"
            )
        if not (pin.isascii() and pin.isdigit()):
            raise BadRequestException("Employee PIN must contain digits only")

    def _ensure_pin_unused(self, db: Session, pin: str, exclude_id: int = None) -> None:
        """Scan every other employee credential, raising on a match"""
        others = self.repo.get_by_role(db, Role.EMPLOYEE, exclude_id=exclude_id)
        if self.matcher.is_in_use(pin, [u.u_pin_hash for u in others]):
            raise DuplicateCredentialException()

    def list_users(self, db: Session) -> List[User]:
        return [User.model_validate(u) for u in self.repo.get_all(db)]

    def create_user(self, db: Session, payload: UserCreate, actor_id: Optional[int] = None) -> User:
        """
        Create employee or admin

        Raises:
            ConflictException: Email already registered
            BadRequestException: PIN fails validation
            DuplicateCredentialException: Employee PIN already used by another employee
        """
        email = str(payload.email)
        if self.repo.exists_by_email(db, email):
            raise ConflictException("Email is already in use.")

        self._validate_pin(payload.pin, payload.role)
        if payload.role == Role.EMPLOYEE:
            self._ensure_pin_unused(db, payload.pin)

        with transaction(db):
            obj = self.repo.model(
                u_email=email,
                u_role=payload.role.value,
                u_pin_hash=self.hasher.hash(payload.pin)
            )
            db.add(obj)
            db.flush()
            self.audit_service.stage(
                db, actor_id, AuditAction.USER_CREATE_SUCCESS, AuditStatus.SUCCESS,
                f"Admin created user: {email}"
            )
            user = User.model_validate(obj)

        logger.info("User created", extra={'extra_data': {'user_id': user.u_id, 'role': user.u_role.value}})
        return user

    def delete_user(self, db: Session, user_id: int, actor_id: Optional[int] = None) -> None:
        """Delete user, their clock events are kept with the old id"""
        obj = self.repo.get(db, user_id)
        if not obj:
            raise NotFoundException("User not found for deletion.")

        email = obj.u_email
        with transaction(db):
            db.delete(obj)
            self.audit_service.stage(
                db, actor_id, AuditAction.USER_DELETE_SUCCESS, AuditStatus.SUCCESS,
                f"Admin deleted user: {email}"
            )
        logger.info("User deleted", extra={'extra_data': {'user_id': user_id}})
        return None

    def reset_pin(self, db: Session, user_id: int, new_pin: str, actor_id: Optional[int] = None) -> None:
        """
        Replace a user's credential

        Raises:
            NotFoundException: User doesn't exist
            DuplicateCredentialException: PIN already used by a different employee
        """
        obj = self.repo.get(db, user_id)
        if not obj:
            raise NotFoundException("User not found for PIN reset.")

        role = Role(obj.u_role)
        self._validate_pin(new_pin, role)
        if role == Role.EMPLOYEE:
            self._ensure_pin_unused(db, new_pin, exclude_id=user_id)

        email = obj.u_email
        with transaction(db):
            obj.u_pin_hash = self.hasher.hash(new_pin)
            db.add(obj)
            self.audit_service.stage(
                db, actor_id, AuditAction.USER_CREDENTIALS_RESET_SUCCESS, AuditStatus.SUCCESS,
                f"Admin reset credentials for user: {email}"
            )
        return None

    def get_user_statuses(self, db: Session) -> List[UserStatus]:
        statuses = []
        for user in self.repo.get_all(db):
            last_event = self.event_repo.latest_for(db, user.u_id)
            status = "Never Clocked In"
            last_action_at = None
            if last_event is not None:
                status = "Clocked In" if last_event.ce_action == ClockAction.CLOCK_IN.value else "Clocked Out"
                last_action_at = last_event.ce_occurred_at
            statuses.append(UserStatus(
                u_id=user.u_id,
                u_email=user.u_email,
                u_role=user.u_role,
                status=status,
                last_action_at=last_action_at
            ))
        return statuses

    def ensure_default_admin(self, db: Session) -> bool:
        """Create the bootstrap admin when missing, returns True if created"""
        if self.repo.exists_by_email(db, settings.DEFAULT_ADMIN_EMAIL):
            return False

        with transaction(db):
            db.add(self.repo.model(
                u_email=settings.DEFAULT_ADMIN_EMAIL,
                u_role=Role.ADMIN.value,
                u_pin_hash=self.hasher.hash(settings.DEFAULT_ADMIN_PASSWORD)
            ))
        logger.info(f"Default admin user created: {settings.DEFAULT_ADMIN_EMAIL}")
        return True
