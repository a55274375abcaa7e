"""
Database session dependency

The engine and SessionLocal are created by atams.db.init_database() in main.py.
"""
from typing import Generator
from sqlalchemy.orm import Session

from atams.db import session as atams_session


def get_db() -> Generator[Session, None, None]:
    """Yield a session from the atams-managed session factory"""
    yield from atams_session.get_db()
