"""User administration. Listing is open to any member; changes need an admin."""

import logging
import uuid

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from liftlog.api.deps import AdminUser, AuthUser, get_admin_user, get_auth_user, get_credential_store
from liftlog.core.constants import MAX_USERNAME_LENGTH, MIN_PASSWORD_LENGTH
from liftlog.core.enums import UserRole
from liftlog.core.errors import BadRequestError, NotFoundError
from liftlog.schemas.user import Credentials, UserRead
from liftlog.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter()

USERS_PATH = "/users"


def _back_to_list() -> RedirectResponse:
    return RedirectResponse(url=USERS_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=list[UserRead])
async def list_users(
    user: AuthUser = Depends(get_auth_user),
    users: CredentialStore = Depends(get_credential_store),
):
    """All users, newest first."""
    return await users.find_all()


@router.get("/new")
async def new_user_form(admin: AdminUser = Depends(get_admin_user)):
    return {
        "role": UserRole.USER.value,
        "min_password_length": MIN_PASSWORD_LENGTH,
        "max_username_length": MAX_USERNAME_LENGTH,
    }


@router.post("")
async def create_user(
    payload: Credentials,
    admin: AdminUser = Depends(get_admin_user),
    users: CredentialStore = Depends(get_credential_store),
):
    created = await users.create(payload.username, payload.password, UserRole.USER)
    logger.info("Admin %s created user %s", admin.user.username, created.username)
    return _back_to_list()


@router.post("/{user_id}/delete")
async def delete_user(
    user_id: uuid.UUID,
    admin: AdminUser = Depends(get_admin_user),
    users: CredentialStore = Depends(get_credential_store),
):
    if user_id == admin.user.id:
        raise BadRequestError("You cannot delete your own account")
    if not await users.delete(user_id):
        raise NotFoundError("User not found")
    logger.info("Admin %s deleted user %s", admin.user.username, user_id)
    return _back_to_list()


@router.post("/{user_id}/promote")
async def promote_user(
    user_id: uuid.UUID,
    admin: AdminUser = Depends(get_admin_user),
    users: CredentialStore = Depends(get_credential_store),
):
    if not await users.update_role(user_id, UserRole.ADMIN):
        raise NotFoundError("User not found")
    logger.info("Admin %s promoted user %s", admin.user.username, user_id)
    return _back_to_list()
