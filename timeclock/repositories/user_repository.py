"""
User Repository - Data access layer for employees and administrators
"""
from typing import Optional, List, Iterable
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from timeclock.models.user import User
from timeclock.core.enums import Role


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email (business key) using ORM"""
        return db.query(User).filter(User.u_email == email).first()

    def exists_by_email(self, db: Session, email: str) -> bool:
        return db.query(User.u_id).filter(User.u_email == email).first() is not None

    def get_by_role(self, db: Session, role: Role, exclude_id: int = None) -> List[User]:
        """
        Get every user of a role in a stable order (by id)

        Used for the kiosk credential scan and duplicate PIN checks,
        there is no way to look a user up by PIN.
        """
        query = db.query(User).filter(User.u_role == role.value)
        if exclude_id is not None:
            query = query.filter(User.u_id != exclude_id)
        return query.order_by(User.u_id.asc()).all()

    def get_for_update(self, db: Session, user_id: int) -> Optional[User]:
        """Lock the user row for the rest of the transaction (no-op on SQLite)"""
        return db.query(User).filter(User.u_id == user_id).with_for_update().first()

    def get_by_ids(self, db: Session, user_ids: Iterable[int]) -> List[User]:
        ids = list(set(user_ids))
        if not ids:
            return []
        return db.query(User).filter(User.u_id.in_(ids)).all()

    def get_all(self, db: Session) -> List[User]:
        return db.query(User).order_by(User.u_id.asc()).all()
