from .user import User
from .clock_event import ClockEvent
from .audit_log import AuditLog

__all__ = [
    "User",
    "ClockEvent",
    "AuditLog"
]
