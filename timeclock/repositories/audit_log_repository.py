"""
Audit Log Repository - Data access layer for the append-only audit trail
"""
from typing import List
from datetime import datetime
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from timeclock.models.audit_log import AuditLog


class AuditLogRepository(BaseRepository[AuditLog]):
    def __init__(self):
        super().__init__(AuditLog)

    def stage_entry(self, db: Session, entry_data: dict) -> AuditLog:
        """Add an entry to the current transaction without committing"""
        db_entry = AuditLog(**entry_data)
        db.add(db_entry)
        db.flush()
        return db_entry

    def find_in_range(self, db: Session, start: datetime, end: datetime) -> List[AuditLog]:
        return db.query(AuditLog).filter(
            AuditLog.al_occurred_at >= start,
            AuditLog.al_occurred_at < end
        ).order_by(AuditLog.al_occurred_at.asc(), AuditLog.al_id.asc()).all()

    def find_all(self, db: Session) -> List[AuditLog]:
        return db.query(AuditLog).order_by(AuditLog.al_occurred_at.asc(), AuditLog.al_id.asc()).all()

    def find_recent(self, db: Session, limit: int = 20) -> List[AuditLog]:
        return self.get_page(db, skip=0, limit=limit)

    def get_page(self, db: Session, skip: int = 0, limit: int = 100) -> List[AuditLog]:
        """Newest first"""
        return db.query(AuditLog).order_by(
            AuditLog.al_occurred_at.desc(), AuditLog.al_id.desc()
        ).offset(skip).limit(limit).all()

    def count_all(self, db: Session) -> int:
        return self.count(db)
