from datetime import timedelta

import pytest
from sqlalchemy import func, select

from liftlog.models.auth_session import AuthSession
from liftlog.services.session_manager import StoreSessionManager, build_session_manager
from liftlog.services.signed_sessions import SignedSessionManager
from tests.helpers import add_user, make_settings

pytestmark = pytest.mark.anyio

LIFETIME = timedelta(days=7)


@pytest.fixture(params=["store", "signed"])
def sessions(request, database, clock):
    if request.param == "store":
        return StoreSessionManager(database, lifetime=LIFETIME, clock=clock)
    return SignedSessionManager(database, "test-secret-key", lifetime=LIFETIME, clock=clock)


@pytest.fixture
def store_sessions(database, clock):
    return StoreSessionManager(database, lifetime=LIFETIME, clock=clock)


@pytest.fixture
def user_id(database):
    return add_user(database, "alice").id


@pytest.fixture
def other_user_id(database):
    return add_user(database, "bob").id


async def test_created_token_resolves_to_user(sessions, user_id):
    token = await sessions.create(user_id)
    assert await sessions.find_valid(token) == user_id


async def test_unknown_and_empty_tokens_resolve_to_nothing(sessions):
    assert await sessions.find_valid("no-such-token") is None
    assert await sessions.find_valid("") is None


async def test_each_login_gets_a_fresh_token(sessions, user_id):
    first = await sessions.create(user_id)
    second = await sessions.create(user_id)
    assert first != second


async def test_valid_strictly_before_expiry(sessions, user_id, clock):
    token = await sessions.create(user_id)
    expires_at = clock.now + LIFETIME

    clock.now = expires_at - timedelta(microseconds=1)
    assert await sessions.find_valid(token) == user_id

    clock.now = expires_at
    assert await sessions.find_valid(token) is None


async def test_deleted_token_is_gone(sessions, user_id):
    token = await sessions.create(user_id)
    await sessions.delete(token)
    assert await sessions.find_valid(token) is None


async def test_delete_unknown_token_is_harmless(sessions):
    await sessions.delete("no-such-token")


async def test_delete_all_for_user_except_keeps_only_one(sessions, user_id, other_user_id, clock):
    keep = await sessions.create(user_id)
    other_a = await sessions.create(user_id)
    other_b = await sessions.create(user_id)
    someone_else = await sessions.create(other_user_id)

    await sessions.delete_all_for_user_except(user_id, keep)

    assert await sessions.find_valid(keep) == user_id
    assert await sessions.find_valid(other_a) is None
    assert await sessions.find_valid(other_b) is None
    assert await sessions.find_valid(someone_else) == other_user_id

    # Later logins are unaffected
    clock.advance(seconds=1)
    fresh = await sessions.create(user_id)
    assert await sessions.find_valid(fresh) == user_id


async def test_store_token_is_opaque(store_sessions, user_id):
    token = await store_sessions.create(user_id)
    assert str(user_id) not in token
    assert user_id.hex not in token
    assert len(token) >= 43


async def test_store_lookup_after_expiry_deletes_the_row(store_sessions, user_id, clock, database):
    token = await store_sessions.create(user_id)
    clock.advance(days=7)

    assert await store_sessions.find_valid(token) is None

    with database.session_factory() as session:
        assert session.get(AuthSession, token) is None


async def test_store_cleanup_expired_removes_only_expired(store_sessions, user_id, clock, database):
    await store_sessions.create(user_id)
    await store_sessions.create(user_id)
    clock.advance(days=6)
    fresh = await store_sessions.create(user_id)
    clock.advance(days=1)

    assert await store_sessions.cleanup_expired() == 2

    assert await store_sessions.find_valid(fresh) == user_id
    with database.session_factory() as session:
        assert session.execute(select(func.count()).select_from(AuthSession)).scalar_one() == 1
    assert await store_sessions.cleanup_expired() == 0


async def test_signed_token_rejects_tampering(database, clock, user_id):
    sessions = SignedSessionManager(database, "test-secret-key", clock=clock)
    token = await sessions.create(user_id)

    payload, signature = token.rsplit(".", 1)
    forged = ("f" if payload[0] != "f" else "e") + payload[1:] + "." + signature
    assert await sessions.find_valid(forged) is None
    other_key = SignedSessionManager(database, "another-key", clock=clock)
    assert await other_key.find_valid(token) is None


async def test_signed_cleanup_prunes_revocations_after_expiry(database, clock, user_id):
    sessions = SignedSessionManager(database, "test-secret-key", lifetime=LIFETIME, clock=clock)
    logged_out = await sessions.create(user_id)
    keep = await sessions.create(user_id)
    await sessions.delete(logged_out)
    await sessions.delete_all_for_user_except(user_id, keep)

    assert await sessions.cleanup_expired() == 0
    clock.advance(days=8)
    assert await sessions.cleanup_expired() == 2


def test_build_session_manager_picks_backend(database):
    assert isinstance(build_session_manager(database, make_settings()), StoreSessionManager)

    signed = build_session_manager(database, make_settings(session_backend="signed", secret_key="k" * 32))
    assert isinstance(signed, SignedSessionManager)

    with pytest.raises(ValueError, match="SECRET_KEY"):
        build_session_manager(database, make_settings(session_backend="signed", secret_key=""))
