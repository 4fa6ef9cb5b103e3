"""Login, logout and first-run setup."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from liftlog.api.deps import (
    OptionalAuthUser,
    clear_session_cookie,
    get_app_settings,
    get_credential_store,
    get_optional_user,
    get_session_manager,
    set_session_cookie,
)
from liftlog.core.config import Settings
from liftlog.core.constants import SESSION_COOKIE_NAME
from liftlog.core.enums import UserRole
from liftlog.schemas.user import Credentials
from liftlog.services.credential_store import CredentialStore
from liftlog.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter()

SETUP_PATH = "/auth/setup"


def _see_other(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login")
async def login_page(
    current: OptionalAuthUser = Depends(get_optional_user),
    users: CredentialStore = Depends(get_credential_store),
):
    """Already logged in -> dashboard; empty install -> setup."""
    if current.user is not None:
        return _see_other("/")
    if await users.count() == 0:
        return _see_other(SETUP_PATH)
    return {"setup_required": False}


@router.post("/login")
async def login(
    payload: Credentials,
    users: CredentialStore = Depends(get_credential_store),
    sessions: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_app_settings),
):
    user = await users.verify(payload.username, payload.password)
    if user is None:
        # Same answer for unknown user and wrong password
        logger.info("Failed login for username %r", payload.username.strip())
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")

    token = await sessions.create(user.id)
    logger.info("User %s logged in", user.username)
    response = _see_other("/")
    set_session_cookie(response, token, settings)
    return response


@router.get("/setup")
async def setup_page(
    users: CredentialStore = Depends(get_credential_store),
    settings: Settings = Depends(get_app_settings),
):
    if await users.count() > 0:
        return _see_other(settings.login_path)
    return {"setup_required": True}


@router.post("/setup")
async def setup(
    payload: Credentials,
    users: CredentialStore = Depends(get_credential_store),
    sessions: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_app_settings),
):
    """Create the first account as admin and log it in. Closed once any user exists."""
    if await users.count() > 0:
        return _see_other(settings.login_path)

    user = await users.create(payload.username, payload.password, UserRole.ADMIN)
    token = await sessions.create(user.id)
    logger.info("Initial admin %s created", user.username)
    response = _see_other("/")
    set_session_cookie(response, token, settings)
    return response


@router.post("/logout")
async def logout(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager),
    settings: Settings = Depends(get_app_settings),
):
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        await sessions.delete(token)
        logger.info("Session logged out")
    response = _see_other(settings.login_path)
    clear_session_cookie(response, settings)
    return response
