"""Shared fixtures: in-memory database, app, clients and user helpers."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

import liftlog.models  # noqa: F401 - register all models
from liftlog.core.enums import UserRole
from liftlog.db.base import Base
from liftlog.db.bridge import Database
from liftlog.db.seed import seed_default_exercises
from liftlog.db.session import install_sqlite_pragmas
from liftlog.main import create_application
from tests.helpers import FakeClock, add_user, login, make_settings


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    install_sqlite_pragmas(engine)
    Base.metadata.create_all(engine)
    # One shared in-memory connection: keep units of work serialized
    db = Database(engine, max_workers=1)
    with db.session_factory() as session, session.begin():
        seed_default_exercises(session)
    yield db
    db.dispose()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings, database):
    return create_application(settings=settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def new_client(app):
    """Factory for extra browsers (separate cookie jars) on the same app."""

    def make() -> TestClient:
        return TestClient(app, follow_redirects=False)

    return make


@pytest.fixture
def admin_client(client, database):
    add_user(database, "admin", role=UserRole.ADMIN)
    login(client, "admin")
    return client


@pytest.fixture
def alice(database):
    return add_user(database, "alice")


@pytest.fixture
def alice_client(new_client, alice):
    c = new_client()
    login(c, "alice")
    return c


@pytest.fixture
def bob_client(new_client, database):
    add_user(database, "bob")
    c = new_client()
    login(c, "bob")
    return c
