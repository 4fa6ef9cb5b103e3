"""Account settings: profile view and password change."""

import logging

from fastapi import APIRouter, Depends

from liftlog.api.deps import AuthUser, get_auth_user, get_credential_store, get_session_manager
from liftlog.core.errors import NotFoundError, ValidationError
from liftlog.schemas.user import MessageResponse, PasswordChange, UserRead
from liftlog.services.credential_store import CredentialStore
from liftlog.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=UserRead)
async def account(
    user: AuthUser = Depends(get_auth_user),
    users: CredentialStore = Depends(get_credential_store),
):
    record = await users.find_by_id(user.id)
    if record is None:
        raise NotFoundError("User not found")
    return record


@router.post("/password", response_model=MessageResponse)
async def change_password(
    payload: PasswordChange,
    user: AuthUser = Depends(get_auth_user),
    users: CredentialStore = Depends(get_credential_store),
    sessions: SessionManager = Depends(get_session_manager),
):
    """
    Change the password after re-checking the current one.

    Every other session of this user is revoked; the one making the request
    stays logged in.
    """
    if payload.new_password != payload.confirm_password:
        raise ValidationError("New passwords do not match")
    if await users.verify(user.username, payload.current_password) is None:
        raise ValidationError("Current password is incorrect")

    await users.change_password(user.id, payload.new_password)
    await sessions.delete_all_for_user_except(user.id, user.session_token)
    logger.info("User %s changed password", user.username)
    return MessageResponse(message="Password updated")
