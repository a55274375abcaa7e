from .clock_service import ClockService
from .timesheet_service import TimesheetService
from .audit_service import AuditService
from .user_service import UserService
from .auth_service import AuthService
from .jwt_service import JwtService
from .cleanup_service import CleanupService

__all__ = [
    "ClockService",
    "TimesheetService",
    "AuditService",
    "UserService",
    "AuthService",
    "JwtService",
    "CleanupService"
]
