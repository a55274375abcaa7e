from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

import pytest

from timeclock.core.enums import ClockAction
from timeclock.models import ClockEvent
from timeclock.services.timesheet_service import TimesheetService, aggregate_events

MONDAY = date(2024, 1, 1)


@dataclass
class FakeEvent:
    ce_user_id: int
    ce_action: str
    ce_occurred_at: datetime
    ce_duration_hours: Optional[float] = None


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def clock_out(user_id, when, hours):
    return FakeEvent(user_id, ClockAction.CLOCK_OUT.value, when, hours)


def clock_in(user_id, when):
    return FakeEvent(user_id, ClockAction.CLOCK_IN.value, when)


def test_single_wednesday_clock_out_is_zero_filled():
    events = [clock_out(1, utc(2024, 1, 3, 17), 4.0)]

    result = aggregate_events(events, MONDAY)

    assert result[1] == {
        "2024-01-01": 0.0,
        "2024-01-02": 0.0,
        "2024-01-03": 4.0,
        "2024-01-04": 0.0,
        "2024-01-05": 0.0,
        "2024-01-06": 0.0,
        "2024-01-07": 0.0,
    }
    assert sum(result[1].values()) == 4.0


def test_clock_ins_contribute_no_hours_but_list_the_employee():
    result = aggregate_events([clock_in(2, utc(2024, 1, 2, 9))], MONDAY)

    assert set(result) == {2}
    assert all(hours == 0.0 for hours in result[2].values())


def test_multiple_sessions_same_day_accumulate():
    events = [
        clock_out(1, utc(2024, 1, 2, 12), 3.0),
        clock_out(1, utc(2024, 1, 2, 18), 4.5),
    ]

    result = aggregate_events(events, MONDAY)

    assert result[1]["2024-01-02"] == pytest.approx(7.5)


def test_hours_land_on_clock_out_day():
    # Overnight shift Monday 22:00 to Tuesday 02:00
    events = [
        clock_in(1, utc(2024, 1, 1, 22)),
        clock_out(1, utc(2024, 1, 2, 2), 4.0),
    ]

    result = aggregate_events(events, MONDAY)

    assert result[1]["2024-01-01"] == 0.0
    assert result[1]["2024-01-02"] == 4.0


def test_custom_window_length():
    result = aggregate_events([clock_out(1, utc(2024, 1, 1, 17), 1.0)], MONDAY, window_days=3)

    assert list(result[1]) == ["2024-01-01", "2024-01-02", "2024-01-03"]


def test_aggregation_is_idempotent():
    events = [clock_out(1, utc(2024, 1, 3, 17), 4.0), clock_out(2, utc(2024, 1, 5, 17), 2.0)]

    assert aggregate_events(events, MONDAY) == aggregate_events(events, MONDAY)


def _store(db, user_id, action, when, session_id, hours=None):
    db.add(ClockEvent(
        ce_user_id=user_id,
        ce_action=action.value,
        ce_occurred_at=when,
        ce_session_id=session_id,
        ce_duration_hours=hours,
    ))


def test_service_aggregates_window_from_store(db, make_user):
    alice = make_user("alice@acme.io", "1111")
    _store(db, alice.u_id, ClockAction.CLOCK_IN, utc(2024, 1, 3, 9), "s-1")
    _store(db, alice.u_id, ClockAction.CLOCK_OUT, utc(2024, 1, 3, 13), "s-1", 4.0)
    # Outside the window
    _store(db, alice.u_id, ClockAction.CLOCK_OUT, utc(2024, 1, 8, 13), "s-2", 9.0)
    db.commit()

    timesheets = TimesheetService().aggregate(db, MONDAY)

    assert len(timesheets) == 1
    sheet = timesheets[0]
    assert sheet.user_id == alice.u_id
    assert sheet.user_email == "alice@acme.io"
    assert len(sheet.daily_hours) == 7
    assert sheet.daily_hours["2024-01-03"] == 4.0
    assert sheet.total_hours == sum(sheet.daily_hours.values()) == 4.0


def test_service_reports_deleted_user_without_email(db):
    _store(db, 42, ClockAction.CLOCK_OUT, utc(2024, 1, 2, 17), "s-1", 2.0)
    db.commit()

    timesheets = TimesheetService().aggregate(db, MONDAY)

    assert timesheets[0].user_id == 42
    assert timesheets[0].user_email is None
    assert timesheets[0].total_hours == 2.0


def test_service_empty_window(db):
    assert TimesheetService().aggregate(db, MONDAY) == []
