"""Application error taxonomy.

Every error the core raises derives from ``AppError``. Each class carries the
HTTP status it maps to and whether its message may be shown to the client.
Internal kinds (storage, hashing, worker scheduling) are logged by the
exception handler and collapsed to a generic "Internal error".
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public: bool = False
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def client_message(self) -> str:
        return self.message if self.public else "Internal error"


class NotFoundError(AppError):
    """Resource absent or not visible to the caller (deliberately merged)."""

    status_code = status.HTTP_404_NOT_FOUND
    public = True
    default_message = "Not found"


class ForbiddenError(AppError):
    """Identity known, role insufficient."""

    status_code = status.HTTP_403_FORBIDDEN
    public = True
    default_message = "Admin access required"


class BadRequestError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    public = True
    default_message = "Bad request"


class ValidationError(AppError):
    """Malformed form input; the message is shown next to the form."""

    status_code = status.HTTP_400_BAD_REQUEST
    public = True
    default_message = "Invalid input"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    public = True
    default_message = "Conflict"


class PasswordHashError(AppError):
    """The hashing subsystem failed; distinct from a wrong password."""

    default_message = "Password hash error"


class StorageError(AppError):
    """Engine error or connection pool exhaustion."""

    default_message = "Database error"


class WorkerError(AppError):
    """The blocking worker could not be scheduled or run."""

    default_message = "Worker error"
