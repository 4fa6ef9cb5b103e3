"""Login session lifecycle: issue, validate, revoke, sweep."""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import timedelta

from sqlalchemy import delete
from sqlalchemy.orm import Session

from liftlog.core.config import Settings
from liftlog.core.security import new_token
from liftlog.core.timeutil import Clock, as_utc, utcnow
from liftlog.db.bridge import Database
from liftlog.models.auth_session import AuthSession

logger = logging.getLogger(__name__)


class SessionManager(ABC):
    """
    Back-end independent session contract.

    A token is valid strictly before its expiry and never again afterwards.
    Deleted and expired tokens look exactly like tokens that never existed.
    """

    @abstractmethod
    async def create(self, user_id: uuid.UUID) -> str: ...

    @abstractmethod
    async def find_valid(self, token: str) -> uuid.UUID | None: ...

    @abstractmethod
    async def delete(self, token: str) -> None: ...

    @abstractmethod
    async def delete_all_for_user_except(self, user_id: uuid.UUID, keep_token: str) -> None: ...

    @abstractmethod
    async def cleanup_expired(self) -> int: ...


class StoreSessionManager(SessionManager):
    """Opaque random tokens backed by the ``sessions`` table."""

    def __init__(self, database: Database, lifetime: timedelta = timedelta(days=7), clock: Clock = utcnow):
        self.database = database
        self.lifetime = lifetime
        self.clock = clock

    async def create(self, user_id: uuid.UUID) -> str:
        token = new_token()
        now = self.clock()

        def work(db: Session) -> None:
            db.add(AuthSession(token=token, user_id=user_id, created_at=now, expires_at=now + self.lifetime))

        await self.database.run(work)
        return token

    async def find_valid(self, token: str) -> uuid.UUID | None:
        if not token:
            return None
        now = self.clock()

        def work(db: Session) -> uuid.UUID | None:
            row = db.get(AuthSession, token)
            if row is None:
                return None
            if as_utc(row.expires_at) <= now:
                db.delete(row)
                return None
            return row.user_id

        return await self.database.run(work)

    async def delete(self, token: str) -> None:
        def work(db: Session) -> None:
            db.execute(delete(AuthSession).where(AuthSession.token == token))

        await self.database.run(work)

    async def delete_all_for_user_except(self, user_id: uuid.UUID, keep_token: str) -> None:
        def work(db: Session) -> int:
            result = db.execute(
                delete(AuthSession).where(AuthSession.user_id == user_id, AuthSession.token != keep_token)
            )
            return result.rowcount

        removed = await self.database.run(work)
        logger.info("Revoked %d other session(s) for user %s", removed, user_id)

    async def cleanup_expired(self) -> int:
        now = self.clock()

        def work(db: Session) -> int:
            return db.execute(delete(AuthSession).where(AuthSession.expires_at <= now)).rowcount

        return await self.database.run(work)


def build_session_manager(database: Database, settings: Settings, clock: Clock = utcnow) -> SessionManager:
    """Pick the back end named by ``settings.session_backend``."""
    lifetime = timedelta(days=settings.session_lifetime_days)
    if settings.session_backend == "signed":
        if not settings.secret_key:
            raise ValueError("SECRET_KEY must be set when SESSION_BACKEND=signed")
        from liftlog.services.signed_sessions import SignedSessionManager

        return SignedSessionManager(database, settings.secret_key, lifetime=lifetime, clock=clock)
    return StoreSessionManager(database, lifetime=lifetime, clock=clock)
