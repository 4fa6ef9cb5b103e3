"""Shared enums for models and API."""

from enum import Enum


class UserRole(str, Enum):
    """Two-role authorization model."""

    ADMIN = "admin"
    USER = "user"

    @property
    def is_admin(self) -> bool:
        return self is UserRole.ADMIN


class ExerciseCategory(str, Enum):
    """Body region an exercise trains."""

    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"
