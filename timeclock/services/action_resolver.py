"""
Action Resolver - decide CLOCK_IN vs CLOCK_OUT from an employee's last event
"""
import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Callable

from timeclock.core.enums import ClockAction
from timeclock.core.timeutils import as_utc

_NAME_SEPARATORS = re.compile(r"[._-]")
DEFAULT_DISPLAY_NAME = "User"


def display_name_from_email(email: Optional[str]) -> str:
    """john.doe_smith@acme.io -> 'John Doe Smith', falls back to 'User'"""
    if not email or "@" not in email:
        return DEFAULT_DISPLAY_NAME
    local_part = email.split("@")[0]
    fragments = [p for p in _NAME_SEPARATORS.split(local_part) if p]
    if not fragments:
        return DEFAULT_DISPLAY_NAME
    return " ".join(p[0].upper() + p[1:].lower() for p in fragments)


def hours_between(start: datetime, end: datetime) -> float:
    """Wall-clock hours from start to end, never negative"""
    elapsed = (as_utc(end) - as_utc(start)).total_seconds() / 3600.0
    return max(elapsed, 0.0)


@dataclass
class ResolvedAction:
    """A fully populated next event plus the kiosk message"""
    user_id: int
    action: ClockAction
    occurred_at: datetime
    session_id: str
    duration_hours: Optional[float]
    message: str

    def to_event_data(self) -> dict:
        return {
            "ce_user_id": self.user_id,
            "ce_action": self.action.value,
            "ce_occurred_at": self.occurred_at,
            "ce_session_id": self.session_id,
            "ce_duration_hours": self.duration_hours,
        }


class ActionResolver:
    """
    Two states per employee: CLOCKED_OUT (default, also "never clocked in")
    and CLOCKED_IN. The latest event decides the next one.
    """

    def __init__(self, session_id_factory: Callable[[], str] = None) -> None:
        self.new_session_id = session_id_factory or (lambda: str(uuid.uuid4()))

    def resolve(self, user_id: int, email: str, last_event, now: datetime) -> ResolvedAction:
        """
        Args:
            user_id: Resolved employee id
            email: Employee email, used for the display name
            last_event: Latest ClockEvent row for the employee, or None
            now: Time of the action (UTC)
        """
        now = as_utc(now)
        name = display_name_from_email(email)

        if last_event is None or last_event.ce_action == ClockAction.CLOCK_OUT.value:
            return ResolvedAction(
                user_id=user_id,
                action=ClockAction.CLOCK_IN,
                occurred_at=now,
                session_id=self.new_session_id(),
                duration_hours=None,
                message=f"Welcome, {name}! Clock-in successful."
            )

        return ResolvedAction(
            user_id=user_id,
            action=ClockAction.CLOCK_OUT,
            occurred_at=now,
            session_id=last_event.ce_session_id,
            duration_hours=hours_between(last_event.ce_occurred_at, now),
            message=f"Goodbye, {name}! Clock-out successful."
        )
