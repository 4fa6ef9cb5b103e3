"""Workout and WorkoutLog schemas."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class WorkoutBase(BaseModel):
    notes: str | None = None


class WorkoutCreate(WorkoutBase):
    date: dt.date


class WorkoutUpdate(BaseModel):
    date: dt.date | None = None
    notes: str | None = None


class WorkoutRead(WorkoutBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    date: dt.date
    share_token: str | None = None
    created_at: dt.datetime


class WorkoutLogCreate(BaseModel):
    exercise_id: UUID
    reps: int
    weight: float
    rpe: int | None = None


class WorkoutLogUpdate(BaseModel):
    """Identity fields (workout, exercise, set number) are fixed once logged."""

    reps: int
    weight: float
    rpe: int | None = None


class WorkoutLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    session_id: UUID
    exercise_id: UUID
    set_number: int
    reps: int
    weight: float
    rpe: int | None = None
    created_at: dt.datetime


class AnnotatedLog(WorkoutLogRead):
    """A log plus its derived PR flag, recomputed on every read."""

    exercise_name: str
    is_pr: bool = False


class WorkoutDetail(WorkoutRead):
    logs: list[AnnotatedLog] = []


class SharedWorkout(BaseModel):
    """Public read-only view behind a share token."""

    username: str
    date: dt.date
    notes: str | None = None
    logs: list[AnnotatedLog] = []


class WorkoutPage(BaseModel):
    page: int
    total_pages: int
    total: int
    workouts: list[WorkoutRead] = []
