import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./.pytest_timeclock.db")
os.environ.setdefault("PIN_HASH_ROUNDS", "4")
os.environ.setdefault("BOOTSTRAP_DEFAULT_ADMIN", "false")
os.environ.setdefault("LOGGING_ENABLED", "false")
os.environ.setdefault("ENCRYPTION_ENABLED", "false")
os.environ.setdefault("ADMIN_JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from atams.db import Base

from timeclock.models import User
from timeclock.core.enums import Role
from timeclock.core.security import PinHasher
from timeclock.db.session import get_db


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'timeclock.db'}",
        connect_args={"check_same_thread": False},
        execution_options={"schema_translate_map": {"timeclock": None}},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def hasher():
    return PinHasher(rounds=4)


@pytest.fixture
def make_user(db, hasher):
    def _make(email: str, pin: str, role: Role = Role.EMPLOYEE) -> User:
        user = User(u_email=email, u_role=role.value, u_pin_hash=hasher.hash(pin))
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def client(session_factory):
    from timeclock.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client, make_user):
    make_user("boss@acme.io", "s3cret-pass", Role.ADMIN)
    resp = client.post("/api/v1/auth/admin/login", json={"email": "boss@acme.io", "password": "s3cret-pass"})
    assert resp.status_code == 200
    token = resp.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}
