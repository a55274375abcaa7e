from .user_repository import UserRepository
from .clock_event_repository import ClockEventRepository
from .audit_log_repository import AuditLogRepository

__all__ = [
    "UserRepository",
    "ClockEventRepository",
    "AuditLogRepository"
]
