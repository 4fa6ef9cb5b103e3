"""
Request dependencies: storage handles and the access-control extractors.

Identity chain: ``session`` cookie -> SessionManager.find_valid ->
CredentialStore.find_by_id. A broken chain redirects to the login page for
``AuthUser``, yields ``None`` for ``OptionalAuthUser``, and an authenticated
non-admin hitting an ``AdminUser`` route gets 403 instead of a redirect.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, Response, status

from liftlog.core.config import Settings
from liftlog.core.constants import SESSION_COOKIE_NAME
from liftlog.core.enums import UserRole
from liftlog.core.errors import AppError, ForbiddenError
from liftlog.db.bridge import Database
from liftlog.services.credential_store import CredentialStore
from liftlog.services.exercise_store import ExerciseStore
from liftlog.services.personal_records import PersonalRecordEngine
from liftlog.services.session_manager import SessionManager
from liftlog.services.workout_store import WorkoutStore

logger = logging.getLogger(__name__)


# ────────────────────────────────────────────
# Application state
# ────────────────────────────────────────────

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_credential_store(database: Database = Depends(get_database)) -> CredentialStore:
    return CredentialStore(database)


def get_exercise_store(database: Database = Depends(get_database)) -> ExerciseStore:
    return ExerciseStore(database)


def get_workout_store(database: Database = Depends(get_database)) -> WorkoutStore:
    return WorkoutStore(database)


def get_pr_engine(database: Database = Depends(get_database)) -> PersonalRecordEngine:
    return PersonalRecordEngine(database)


# ────────────────────────────────────────────
# Identities
# ────────────────────────────────────────────

@dataclass(frozen=True)
class AuthUser:
    id: uuid.UUID
    username: str
    role: UserRole
    session_token: str

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin


@dataclass(frozen=True)
class OptionalAuthUser:
    user: AuthUser | None


@dataclass(frozen=True)
class AdminUser:
    user: AuthUser


async def _resolve_user(request: Request, sessions: SessionManager, users: CredentialStore) -> AuthUser | None:
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None
    try:
        user_id = await sessions.find_valid(token)
        if user_id is None:
            return None
        user = await users.find_by_id(user_id)
    except AppError as exc:
        # The browser still gets the login redirect; the cause goes to the log
        logger.error("Session lookup failed: %s", exc, exc_info=True)
        return None
    if user is None:
        return None
    return AuthUser(id=user.id, username=user.username, role=user.role, session_token=token)


async def get_auth_user(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    users: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_app_settings),
) -> AuthUser:
    user = await _resolve_user(request, sessions, users)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Not authenticated",
            headers={"Location": settings.login_path},
        )
    return user


async def get_optional_user(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    users: CredentialStore = Depends(get_credential_store),
) -> OptionalAuthUser:
    return OptionalAuthUser(user=await _resolve_user(request, sessions, users))


async def get_admin_user(user: AuthUser = Depends(get_auth_user)) -> AdminUser:
    """Role comes from the credential store on every request, never from the cookie."""
    if not user.is_admin:
        raise ForbiddenError()
    return AdminUser(user=user)


# ────────────────────────────────────────────
# Session cookie
# ────────────────────────────────────────────

def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_lifetime_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
