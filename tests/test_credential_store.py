import pytest
from sqlalchemy import select, update

from liftlog.core.enums import UserRole
from liftlog.core.errors import ConflictError, PasswordHashError, ValidationError
from liftlog.models.auth_session import AuthSession
from liftlog.models.user import User
from liftlog.services.credential_store import CredentialStore
from liftlog.services.session_manager import StoreSessionManager

pytestmark = pytest.mark.anyio


@pytest.fixture
def store(database, clock):
    return CredentialStore(database, clock=clock)


async def test_create_then_verify_round_trip(store):
    user = await store.create("alice", "secret1", UserRole.USER)

    verified = await store.verify("alice", "secret1")

    assert verified is not None
    assert verified.id == user.id
    assert verified.role == UserRole.USER
    assert user.password_hash != "secret1"
    assert user.password_hash.startswith("$argon2")


async def test_same_password_gets_different_hashes(store):
    first = await store.create("alice", "secret1")
    second = await store.create("bob", "secret1")
    assert first.password_hash != second.password_hash


async def test_wrong_password_and_unknown_user_both_return_none(store):
    await store.create("alice", "secret1")

    assert await store.verify("alice", "wrong-password") is None
    assert await store.verify("nobody", "secret1") is None


async def test_duplicate_username_is_a_conflict(store):
    await store.create("alice", "secret1")

    with pytest.raises(ConflictError, match="Username already exists"):
        await store.create("alice", "another1")
    assert await store.count() == 1


async def test_username_is_trimmed(store):
    await store.create("  alice  ", "secret1")

    assert (await store.find_by_username("alice")) is not None
    with pytest.raises(ConflictError):
        await store.create("alice", "secret1")


@pytest.mark.parametrize(
    "username,password,message",
    [
        ("", "secret1", "Username is required"),
        ("   ", "secret1", "Username is required"),
        ("alice", "short", "Password must be at least 6 characters"),
        ("x" * 65, "secret1", "at most 64"),
    ],
)
async def test_create_rejects_malformed_input(store, username, password, message):
    with pytest.raises(ValidationError, match=message):
        await store.create(username, password)
    assert await store.count() == 0


async def test_unreadable_stored_hash_is_an_error_not_a_mismatch(store, database):
    user = await store.create("alice", "secret1")
    with database.session_factory() as session, session.begin():
        session.execute(update(User).where(User.id == user.id).values(password_hash="not-a-hash"))

    with pytest.raises(PasswordHashError):
        await store.verify("alice", "secret1")


async def test_change_password(store):
    user = await store.create("alice", "secret1")

    assert await store.change_password(user.id, "secret2") is True

    assert await store.verify("alice", "secret1") is None
    assert (await store.verify("alice", "secret2")).id == user.id


async def test_change_password_validates_length(store):
    user = await store.create("alice", "secret1")
    with pytest.raises(ValidationError):
        await store.change_password(user.id, "abc")


async def test_update_role_and_missing_user(store):
    user = await store.create("alice", "secret1")

    assert await store.update_role(user.id, UserRole.ADMIN) is True
    assert (await store.find_by_id(user.id)).role == UserRole.ADMIN

    await store.delete(user.id)
    assert await store.update_role(user.id, UserRole.USER) is False


async def test_find_all_is_newest_first(store, clock):
    await store.create("first", "secret1")
    clock.advance(minutes=1)
    await store.create("second", "secret1")
    clock.advance(minutes=1)
    await store.create("third", "secret1")

    users = await store.find_all()

    assert [u.username for u in users] == ["third", "second", "first"]
    assert await store.count() == 3


async def test_delete_removes_user_and_their_sessions(store, database, clock):
    user = await store.create("alice", "secret1")
    sessions = StoreSessionManager(database, clock=clock)
    token = await sessions.create(user.id)

    assert await store.delete(user.id) is True

    assert await store.find_by_id(user.id) is None
    assert await sessions.find_valid(token) is None
    with database.session_factory() as session:
        assert session.execute(select(AuthSession)).first() is None
    assert await store.delete(user.id) is False
