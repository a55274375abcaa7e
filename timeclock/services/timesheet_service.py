"""
Timesheet Service - Weekly aggregation and timesheet CSV export
"""
import csv
import io
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from atams.logging import get_logger

from timeclock.repositories.clock_event_repository import ClockEventRepository
from timeclock.repositories.user_repository import UserRepository
from timeclock.services.audit_service import AuditService
from timeclock.schemas.timesheet import WeeklyTimesheet
from timeclock.core.enums import ClockAction, AuditAction, AuditStatus
from timeclock.core.timeutils import as_utc, start_of_day, current_week_start, isoformat_utc

logger = get_logger(__name__)

TIMESHEET_CSV_HEADERS = ["LogID", "UserID", "UserEmail", "Action", "Timestamp (UTC)", "SessionID", "DurationHours"]


def aggregate_events(events, window_start: date, window_days: int = 7) -> Dict[int, Dict[str, float]]:
    """
    Bucket CLOCK_OUT durations per employee and UTC calendar day

    Every employee with an event in the list gets exactly window_days
    entries, zero-filled. Events are assumed to already be in the window.
    """
    days = [(window_start + timedelta(days=i)).isoformat() for i in range(window_days)]
    per_user: Dict[int, Dict[str, float]] = {}
    hours_by_day: Dict[int, Dict[str, float]] = defaultdict(lambda: defaultdict(float))

    for event in events:
        per_user.setdefault(event.ce_user_id, {})
        if event.ce_action != ClockAction.CLOCK_OUT.value or event.ce_duration_hours is None:
            continue
        day_key = as_utc(event.ce_occurred_at).date().isoformat()
        hours_by_day[event.ce_user_id][day_key] += event.ce_duration_hours

    for user_id in per_user:
        per_user[user_id] = {day: hours_by_day[user_id].get(day, 0.0) for day in days}
    return per_user


class TimesheetService:
    def __init__(self) -> None:
        self.event_repo = ClockEventRepository()
        self.user_repo = UserRepository()
        self.audit_service = AuditService()

    def aggregate(self, db: Session, window_start: date, window_days: int = 7) -> List[WeeklyTimesheet]:
        """
        Per-employee daily and total hours for [window_start, window_start + window_days)

        Args:
            db: Database session
            window_start: First day of the window (UTC midnight)
            window_days: Number of days in the window (default 7)

        Returns:
            List[WeeklyTimesheet]: Sorted by user id, total is the sum of the daily values
        """
        start = start_of_day(window_start)
        end = start + timedelta(days=window_days)
        events = self.event_repo.find_in_range(db, start, end)

        per_user = aggregate_events(events, window_start, window_days)
        users = {u.u_id: u for u in self.user_repo.get_by_ids(db, per_user.keys())}

        timesheets = []
        for user_id in sorted(per_user):
            daily_hours = per_user[user_id]
            user = users.get(user_id)
            timesheets.append(WeeklyTimesheet(
                user_id=user_id,
                user_email=user.u_email if user else None,
                daily_hours=daily_hours,
                total_hours=sum(daily_hours.values())
            ))
        return timesheets

    def export_csv(
        self,
        db: Session,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        actor_id: Optional[int] = None
    ) -> str:
        """
        Render clock events as CSV, header row first

        Without a range the current UTC week (Monday to Monday) is exported.
        """
        if start is None or end is None:
            start = start_of_day(current_week_start())
            end = start + timedelta(days=7)

        events = self.event_repo.find_in_range(db, as_utc(start), as_utc(end))
        users = {u.u_id: u for u in self.user_repo.get_by_ids(db, {e.ce_user_id for e in events})}

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(TIMESHEET_CSV_HEADERS)
        for event in events:
            user = users.get(event.ce_user_id)
            writer.writerow([
                event.ce_id,
                event.ce_user_id,
                user.u_email if user else f"Unknown User (ID: {event.ce_user_id})",
                event.ce_action,
                isoformat_utc(event.ce_occurred_at),
                event.ce_session_id,
                f"{event.ce_duration_hours:.2f}" if event.ce_duration_hours is not None else ""
            ])

        self.audit_service.log(
            db, actor_id, AuditAction.TIMESHEET_EXPORT, AuditStatus.SUCCESS,
            f"Timesheet exported ({len(events)} rows)."
        )
        logger.info("Timesheet exported", extra={'extra_data': {'rows': len(events)}})
        return buffer.getvalue()
