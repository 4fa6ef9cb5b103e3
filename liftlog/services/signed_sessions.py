"""Stateless session tokens signed with itsdangerous.

The cookie carries ``{uid, jti, iat}`` and nothing else; the role is looked up
on every request. Without a per-session row, revocation needs two small
tables: a deny-list of logged-out token ids and a per-user cutoff that kills
every token issued at or before it except one.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta

from itsdangerous import BadSignature, URLSafeSerializer
from sqlalchemy import delete
from sqlalchemy.orm import Session

from liftlog.core.security import new_token
from liftlog.core.timeutil import Clock, as_utc, utcnow
from liftlog.db.bridge import Database
from liftlog.models.auth_session import RevokedSessionToken, SessionCutoff
from liftlog.models.user import User
from liftlog.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

SESSION_SALT = "liftlog-session"


class SignedSessionManager(SessionManager):
    def __init__(
        self,
        database: Database,
        secret_key: str,
        lifetime: timedelta = timedelta(days=7),
        clock: Clock = utcnow,
    ):
        self.database = database
        self.lifetime = lifetime
        self.clock = clock
        self.serializer = URLSafeSerializer(secret_key, salt=SESSION_SALT)

    def _decode(self, token: str) -> tuple[uuid.UUID, str, datetime] | None:
        try:
            payload = self.serializer.loads(token)
            return uuid.UUID(payload["uid"]), str(payload["jti"]), as_utc(datetime.fromisoformat(payload["iat"]))
        except BadSignature:
            return None
        except (KeyError, TypeError, ValueError):
            logger.warning("Signed session token with a valid signature had a malformed payload")
            return None

    async def create(self, user_id: uuid.UUID) -> str:
        payload = {"uid": str(user_id), "jti": new_token(16), "iat": self.clock().isoformat()}
        return self.serializer.dumps(payload)

    async def find_valid(self, token: str) -> uuid.UUID | None:
        if not token:
            return None
        decoded = self._decode(token)
        if decoded is None:
            return None
        user_id, token_id, issued_at = decoded
        if issued_at + self.lifetime <= self.clock():
            return None

        def work(db: Session) -> uuid.UUID | None:
            if db.get(RevokedSessionToken, token_id) is not None:
                return None
            cutoff = db.get(SessionCutoff, user_id)
            if (
                cutoff is not None
                and issued_at <= as_utc(cutoff.revoked_before)
                and token_id != cutoff.keep_token_id
            ):
                return None
            return user_id

        return await self.database.run(work)

    async def delete(self, token: str) -> None:
        decoded = self._decode(token)
        if decoded is None:
            return
        user_id, token_id, issued_at = decoded

        def work(db: Session) -> None:
            if db.get(User, user_id) is None:
                return
            db.merge(RevokedSessionToken(token_id=token_id, user_id=user_id, expires_at=issued_at + self.lifetime))

        await self.database.run(work)

    async def delete_all_for_user_except(self, user_id: uuid.UUID, keep_token: str) -> None:
        decoded = self._decode(keep_token)
        keep_token_id = decoded[1] if decoded is not None and decoded[0] == user_id else None
        now = self.clock()

        def work(db: Session) -> None:
            db.merge(
                SessionCutoff(
                    user_id=user_id,
                    revoked_before=now,
                    keep_token_id=keep_token_id,
                    expires_at=now + self.lifetime,
                )
            )

        await self.database.run(work)
        logger.info("Revoked other signed sessions for user %s", user_id)

    async def cleanup_expired(self) -> int:
        """Drop deny-list and cutoff rows whose tokens have expired on their own."""
        now = self.clock()

        def work(db: Session) -> int:
            revoked = db.execute(delete(RevokedSessionToken).where(RevokedSessionToken.expires_at <= now)).rowcount
            cutoffs = db.execute(delete(SessionCutoff).where(SessionCutoff.expires_at <= now)).rowcount
            return revoked + cutoffs

        return await self.database.run(work)
