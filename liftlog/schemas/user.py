"""User and credential schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from liftlog.core.enums import UserRole


class Credentials(BaseModel):
    """Login, setup and new-user submissions. Length rules are checked by the store."""

    username: str
    password: str


class PasswordChange(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str


class UserRead(BaseModel):
    """Public view of a user; the password hash never leaves the store."""

    model_config = ConfigDict(from_attributes=True)
    id: UUID
    username: str
    role: UserRole
    created_at: datetime


class MessageResponse(BaseModel):
    message: str
