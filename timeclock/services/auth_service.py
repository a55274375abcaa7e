"""
Auth Service - Admin dashboard login
"""
from typing import Optional
from sqlalchemy.orm import Session

from atams.logging import get_logger
from atams.exceptions import UnauthorizedException, ForbiddenException

from timeclock.repositories.user_repository import UserRepository
from timeclock.services.audit_service import AuditService
from timeclock.services.jwt_service import JwtService
from timeclock.schemas.auth import TokenResponse
from timeclock.core.security import PinHasher
from timeclock.core.enums import Role, AuditAction, AuditStatus

logger = get_logger(__name__)


class AuthService:
    def __init__(self, hasher: PinHasher = None) -> None:
        self.user_repo = UserRepository()
        self.audit_service = AuditService()
        self.jwt_service = JwtService()
        self.hasher = hasher or PinHasher()

    def admin_login(
        self,
        db: Session,
        email: str,
        password: str,
        ip_address: Optional[str] = None
    ) -> TokenResponse:
        """
        Authenticate an administrator and issue a bearer token

        Raises:
            UnauthorizedException: Unknown email or wrong password
            ForbiddenException: Valid credentials but not an admin
        """
        user = self.user_repo.get_by_email(db, email)
        if user is None or not self.hasher.verify(password, user.u_pin_hash):
            logger.warning("Admin login failed", extra={'extra_data': {'ip_address': ip_address}})
            self.audit_service.log(
                db, user.u_id if user else None, AuditAction.ADMIN_LOGIN_FAILURE, AuditStatus.FAILURE,
                f"Failed admin login attempt for email: {email}", ip_address
            )
            raise UnauthorizedException("Incorrect email or password")

        if user.u_role != Role.ADMIN.value:
            logger.warning(
                "Non-admin user attempted admin login",
                extra={'extra_data': {'user_id': user.u_id, 'ip_address': ip_address}}
            )
            self.audit_service.log(
                db, user.u_id, AuditAction.ADMIN_LOGIN_FAILURE, AuditStatus.FAILURE,
                "Access denied: user is not an administrator.", ip_address
            )
            raise ForbiddenException("Access denied: Administrator privileges required")

        token, expires_in = self.jwt_service.generate_admin_token(user)
        self.audit_service.log(
            db, user.u_id, AuditAction.ADMIN_LOGIN_SUCCESS, AuditStatus.SUCCESS,
            "Admin logged in successfully.", ip_address
        )
        logger.info("Admin logged in", extra={'extra_data': {'user_id': user.u_id}})

        return TokenResponse(token=token, expires_in=expires_in, email=user.u_email, role=Role(user.u_role))
