"""Test helpers shared across modules."""

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from liftlog.core.config import Settings
from liftlog.core.enums import UserRole
from liftlog.core.security import hash_password
from liftlog.db.bridge import Database
from liftlog.models.user import User

DEFAULT_PASSWORD = "password1"


class FakeClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_settings(**overrides) -> Settings:
    values = {"database_url": "sqlite://", "environment": "test", "log_level": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def add_user(database: Database, username: str, password: str = DEFAULT_PASSWORD, role: UserRole = UserRole.USER) -> User:
    with database.session_factory() as session, session.begin():
        user = User(username=username, password_hash=hash_password(password), role=role)
        session.add(user)
        session.flush()
    return user


def login(client: TestClient, username: str, password: str = DEFAULT_PASSWORD):
    response = client.post("/auth/login", json={"username": username, "password": password})
    assert response.status_code == 303, response.text
    return response
