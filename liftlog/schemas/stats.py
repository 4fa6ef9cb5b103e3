"""Personal record and statistics schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from liftlog.schemas.exercise import ExerciseRead
from liftlog.schemas.workout import AnnotatedLog, WorkoutRead


class PersonalRecord(BaseModel):
    """Current best (max weight) for one exercise; ``achieved_at`` is the newest log at that weight."""

    exercise_id: UUID
    exercise_name: str
    value: float
    achieved_at: datetime


class DashboardRead(BaseModel):
    username: str
    workouts_this_week: int
    workouts_this_month: int
    volume_this_week: float
    recent_workouts: list[WorkoutRead] = []
    recent_prs: list[PersonalRecord] = []


class StatsOverview(BaseModel):
    workouts_this_week: int
    workouts_this_month: int
    volume_this_week: float
    total_workouts: int
    prs: list[PersonalRecord] = []


class ExerciseStats(BaseModel):
    exercise: ExerciseRead
    current_pr: PersonalRecord | None = None
    history: list[AnnotatedLog] = []
