"""
Clock Event Repository - Data access layer for clock events
"""
from typing import Optional, List
from datetime import datetime
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from timeclock.models.clock_event import ClockEvent


class ClockEventRepository(BaseRepository[ClockEvent]):
    def __init__(self):
        super().__init__(ClockEvent)

    def latest_for(self, db: Session, user_id: int) -> Optional[ClockEvent]:
        """Most recent event for a user, ties broken by insertion order"""
        return db.query(ClockEvent).filter(
            ClockEvent.ce_user_id == user_id
        ).order_by(ClockEvent.ce_occurred_at.desc(), ClockEvent.ce_id.desc()).first()

    def stage_event(self, db: Session, event_data: dict) -> ClockEvent:
        """
        Add an event to the caller's transaction without committing

        The caller owns the transaction (see atams.transaction.transaction),
        so the event and its audit entry commit or roll back together.
        """
        db_event = ClockEvent(**event_data)
        db.add(db_event)
        db.flush()
        return db_event

    def find_in_range(self, db: Session, start: datetime, end: datetime) -> List[ClockEvent]:
        """Events with start <= occurred_at < end, oldest first"""
        return db.query(ClockEvent).filter(
            ClockEvent.ce_occurred_at >= start,
            ClockEvent.ce_occurred_at < end
        ).order_by(ClockEvent.ce_occurred_at.asc(), ClockEvent.ce_id.asc()).all()

    def delete_all(self, db: Session) -> int:
        """Bulk delete every event inside the caller's transaction, returns row count"""
        return db.query(ClockEvent).delete(synchronize_session=False)
