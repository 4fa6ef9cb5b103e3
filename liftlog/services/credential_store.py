"""Credential store: users, salted Argon2 password hashes and roles."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liftlog.core.constants import MAX_USERNAME_LENGTH, MIN_PASSWORD_LENGTH
from liftlog.core.enums import UserRole
from liftlog.core.errors import ConflictError, ValidationError
from liftlog.core.security import dummy_verify, hash_password, verify_password
from liftlog.core.timeutil import Clock, utcnow
from liftlog.db.bridge import Database
from liftlog.models.user import User
from liftlog.models.workout import Workout

logger = logging.getLogger(__name__)


def clean_username(username: str) -> str:
    username = username.strip()
    if not username:
        raise ValidationError("Username is required")
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
    return username


def check_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


class CredentialStore:
    """
    Persists identities and verifies credentials.

    ``verify`` answers ``None`` for both an unknown username and a wrong
    password. A hashing failure raises ``PasswordHashError`` instead, so callers
    can tell "wrong password" from "could not check".
    """

    def __init__(self, database: Database, clock: Clock = utcnow):
        self.database = database
        self.clock = clock

    async def create(self, username: str, password: str, role: UserRole = UserRole.USER) -> User:
        username = clean_username(username)
        check_password(password)
        password_hash = await self.database.offload(hash_password, password)
        created_at = self.clock()

        def work(db: Session) -> User:
            user = User(username=username, password_hash=password_hash, role=role, created_at=created_at)
            db.add(user)
            try:
                # The UNIQUE constraint decides; no check-then-insert race
                db.flush()
            except IntegrityError as exc:
                raise ConflictError("Username already exists") from exc
            return user

        user = await self.database.run(work)
        logger.info("Created user %s with role %s", user.username, user.role.value)
        return user

    async def verify(self, username: str, password: str) -> User | None:
        user = await self.find_by_username(username)
        if user is None:
            await self.database.offload(dummy_verify)
            return None
        if await self.database.offload(verify_password, password, user.password_hash):
            return user
        return None

    async def change_password(self, user_id: uuid.UUID, new_password: str) -> bool:
        check_password(new_password)
        password_hash = await self.database.offload(hash_password, new_password)

        def work(db: Session) -> bool:
            result = db.execute(update(User).where(User.id == user_id).values(password_hash=password_hash))
            return result.rowcount > 0

        return await self.database.run(work)

    async def update_role(self, user_id: uuid.UUID, role: UserRole) -> bool:
        def work(db: Session) -> bool:
            result = db.execute(update(User).where(User.id == user_id).values(role=role))
            return result.rowcount > 0

        return await self.database.run(work)

    async def delete(self, user_id: uuid.UUID) -> bool:
        """Remove the user with their sessions, workouts and custom exercises."""

        def work(db: Session) -> bool:
            # Logs go before exercises: workout_logs.exercise_id is ON DELETE RESTRICT
            db.execute(delete(Workout).where(Workout.user_id == user_id))
            result = db.execute(delete(User).where(User.id == user_id))
            return result.rowcount > 0

        return await self.database.run(work)

    async def find_by_id(self, user_id: uuid.UUID) -> User | None:
        return await self.database.run(lambda db: db.get(User, user_id))

    async def find_by_username(self, username: str) -> User | None:
        username = username.strip()
        return await self.database.run(
            lambda db: db.execute(select(User).where(User.username == username)).scalar_one_or_none()
        )

    async def count(self) -> int:
        return await self.database.run(lambda db: db.execute(select(func.count(User.id))).scalar_one())

    async def find_all(self) -> list[User]:
        """All users, newest first."""
        return await self.database.run(
            lambda db: list(db.execute(select(User).order_by(User.created_at.desc())).scalars().all())
        )
