from .user import User, UserCreate, ResetPinRequest, UserStatus
from .attendance import ClockRequest, ClockResponse
from .audit import AuditLogEntry, Notification
from .timesheet import WeeklyTimesheet, WeeklyResetResult
from .auth import AdminLoginRequest, TokenResponse
from atams.schemas import DataResponse, PaginationResponse

__all__ = [
    # User schemas
    "User",
    "UserCreate",
    "ResetPinRequest",
    "UserStatus",
    # Attendance schemas
    "ClockRequest",
    "ClockResponse",
    # Audit schemas
    "AuditLogEntry",
    "Notification",
    # Timesheet schemas
    "WeeklyTimesheet",
    "WeeklyResetResult",
    # Auth schemas
    "AdminLoginRequest",
    "TokenResponse",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
