"""Server-side login sessions and the revocation tables used by signed tokens."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from liftlog.db.base import Base


class AuthSession(Base):
    """
    One browser login (not a workout session).

    The token is the cookie value. A row never outlives ``expires_at``: it is
    deleted on logout, on password change, when a read finds it expired, or by
    the periodic sweep.
    """

    __tablename__ = "sessions"

    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    user: Mapped["User"] = relationship("User", back_populates="auth_sessions")


class RevokedSessionToken(Base):
    """Signed token id revoked by logout; kept until the token would have expired anyway."""

    __tablename__ = "revoked_session_tokens"

    token_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)


class SessionCutoff(Base):
    """Signed tokens for a user issued at or before ``revoked_before`` are invalid, except ``keep_token_id``."""

    __tablename__ = "session_cutoffs"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    revoked_before: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    keep_token_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
