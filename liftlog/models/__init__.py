"""ORM models - import all so Base.metadata is complete for migrations."""

from liftlog.models.auth_session import AuthSession, RevokedSessionToken, SessionCutoff
from liftlog.models.exercise import Exercise
from liftlog.models.user import User
from liftlog.models.workout import Workout, WorkoutLog

__all__ = [
    "AuthSession",
    "Exercise",
    "RevokedSessionToken",
    "SessionCutoff",
    "User",
    "Workout",
    "WorkoutLog",
]
