"""Workouts, their logged sets, sharing and training volume.

Every lookup goes through ``owned_workout``: a workout that is missing and one
that belongs to someone else both raise the same 404.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from liftlog.core.constants import MAX_REPS, MAX_RPE, MIN_RPE, WORKOUTS_PAGE_SIZE
from liftlog.core.errors import NotFoundError, ValidationError
from liftlog.core.security import new_token
from liftlog.core.timeutil import Clock, utcnow
from liftlog.db.bridge import Database
from liftlog.models.user import User
from liftlog.models.workout import Workout, WorkoutLog
from liftlog.schemas.workout import (
    AnnotatedLog,
    SharedWorkout,
    WorkoutCreate,
    WorkoutDetail,
    WorkoutLogCreate,
    WorkoutLogUpdate,
    WorkoutPage,
    WorkoutRead,
    WorkoutUpdate,
)
from liftlog.services.exercise_store import visible_exercise
from liftlog.services.personal_records import annotate_logs

logger = logging.getLogger(__name__)


def check_set(reps: int, weight: float, rpe: int | None) -> None:
    if reps <= 0:
        raise ValidationError("Reps must be greater than 0")
    if reps > MAX_REPS:
        raise ValidationError(f"Reps must be at most {MAX_REPS}")
    if not math.isfinite(weight) or weight < 0:
        raise ValidationError("Weight must be a non-negative number")
    if rpe is not None and not MIN_RPE <= rpe <= MAX_RPE:
        raise ValidationError(f"RPE must be between {MIN_RPE} and {MAX_RPE}")


def owned_workout(db: Session, user_id: uuid.UUID, workout_id: uuid.UUID) -> Workout:
    workout = db.get(Workout, workout_id)
    if workout is None or workout.user_id != user_id:
        raise NotFoundError("Workout not found")
    return workout


def owned_log(db: Session, workout: Workout, log_id: uuid.UUID) -> WorkoutLog:
    log = db.get(WorkoutLog, log_id)
    if log is None or log.session_id != workout.id:
        raise NotFoundError("Log not found")
    return log


def workout_logs(db: Session, workout_id: uuid.UUID) -> list[WorkoutLog]:
    stmt = (
        select(WorkoutLog)
        .where(WorkoutLog.session_id == workout_id)
        .order_by(WorkoutLog.created_at, WorkoutLog.set_number)
    )
    return list(db.execute(stmt).scalars().all())


def next_set_number(db: Session, workout_id: uuid.UUID, exercise_id: uuid.UUID) -> int:
    current = db.execute(
        select(func.max(WorkoutLog.set_number)).where(
            WorkoutLog.session_id == workout_id, WorkoutLog.exercise_id == exercise_id
        )
    ).scalar()
    return (current or 0) + 1


@dataclass
class TrainingSummary:
    workouts_this_week: int
    workouts_this_month: int
    volume_this_week: float
    total_workouts: int


class WorkoutStore:
    def __init__(self, database: Database, clock: Clock = utcnow):
        self.database = database
        self.clock = clock

    # -- workouts ---------------------------------------------------------

    async def list_page(self, user_id: uuid.UUID, page: int = 1, page_size: int = WORKOUTS_PAGE_SIZE) -> WorkoutPage:
        """Newest first. Out-of-range pages are clamped."""

        def work(db: Session) -> WorkoutPage:
            total = db.execute(select(func.count(Workout.id)).where(Workout.user_id == user_id)).scalar_one()
            total_pages = max(1, math.ceil(total / page_size))
            current = min(max(page, 1), total_pages)
            workouts = (
                db.execute(
                    select(Workout)
                    .where(Workout.user_id == user_id)
                    .order_by(Workout.date.desc(), Workout.created_at.desc())
                    .offset((current - 1) * page_size)
                    .limit(page_size)
                )
                .scalars()
                .all()
            )
            return WorkoutPage(
                page=current,
                total_pages=total_pages,
                total=total,
                workouts=[WorkoutRead.model_validate(w) for w in workouts],
            )

        return await self.database.run(work)

    async def recent(self, user_id: uuid.UUID, limit: int = 5) -> list[Workout]:
        def work(db: Session) -> list[Workout]:
            stmt = (
                select(Workout)
                .where(Workout.user_id == user_id)
                .order_by(Workout.date.desc(), Workout.created_at.desc())
                .limit(limit)
            )
            return list(db.execute(stmt).scalars().all())

        return await self.database.run(work)

    async def create(self, user_id: uuid.UUID, payload: WorkoutCreate) -> Workout:
        created_at = self.clock()

        def work(db: Session) -> Workout:
            workout = Workout(user_id=user_id, date=payload.date, notes=payload.notes, created_at=created_at)
            db.add(workout)
            db.flush()
            return workout

        return await self.database.run(work)

    async def detail(self, user_id: uuid.UUID, workout_id: uuid.UUID) -> WorkoutDetail:
        def work(db: Session) -> WorkoutDetail:
            workout = owned_workout(db, user_id, workout_id)
            logs = annotate_logs(db, user_id, workout_logs(db, workout.id))
            return WorkoutDetail(**WorkoutRead.model_validate(workout).model_dump(), logs=logs)

        return await self.database.run(work)

    async def update(self, user_id: uuid.UUID, workout_id: uuid.UUID, payload: WorkoutUpdate) -> Workout:
        def work(db: Session) -> Workout:
            workout = owned_workout(db, user_id, workout_id)
            data = payload.model_dump(exclude_unset=True)
            if data.get("date") is not None:
                workout.date = data["date"]
            if "notes" in data:
                workout.notes = data["notes"]
            db.flush()
            return workout

        return await self.database.run(work)

    async def delete(self, user_id: uuid.UUID, workout_id: uuid.UUID) -> None:
        def work(db: Session) -> None:
            db.delete(owned_workout(db, user_id, workout_id))

        await self.database.run(work)

    # -- logged sets ------------------------------------------------------

    async def add_log(self, user_id: uuid.UUID, workout_id: uuid.UUID, payload: WorkoutLogCreate) -> AnnotatedLog:
        check_set(payload.reps, payload.weight, payload.rpe)
        created_at = self.clock()

        def work(db: Session) -> AnnotatedLog:
            workout = owned_workout(db, user_id, workout_id)
            exercise = visible_exercise(db, user_id, payload.exercise_id)
            log = WorkoutLog(
                session_id=workout.id,
                exercise_id=exercise.id,
                set_number=next_set_number(db, workout.id, exercise.id),
                reps=payload.reps,
                weight=payload.weight,
                rpe=payload.rpe,
                created_at=created_at,
            )
            db.add(log)
            db.flush()
            return annotate_logs(db, user_id, [log])[0]

        return await self.database.run(work)

    async def update_log(
        self, user_id: uuid.UUID, workout_id: uuid.UUID, log_id: uuid.UUID, payload: WorkoutLogUpdate
    ) -> AnnotatedLog:
        check_set(payload.reps, payload.weight, payload.rpe)

        def work(db: Session) -> AnnotatedLog:
            log = owned_log(db, owned_workout(db, user_id, workout_id), log_id)
            log.reps = payload.reps
            log.weight = payload.weight
            log.rpe = payload.rpe
            db.flush()
            return annotate_logs(db, user_id, [log])[0]

        return await self.database.run(work)

    async def delete_log(self, user_id: uuid.UUID, workout_id: uuid.UUID, log_id: uuid.UUID) -> None:
        def work(db: Session) -> None:
            db.delete(owned_log(db, owned_workout(db, user_id, workout_id), log_id))

        await self.database.run(work)

    # -- sharing ----------------------------------------------------------

    async def share(self, user_id: uuid.UUID, workout_id: uuid.UUID) -> str:
        """Mint a public token, or return the one already issued."""

        def work(db: Session) -> str:
            workout = owned_workout(db, user_id, workout_id)
            if workout.share_token is None:
                workout.share_token = new_token()
            return workout.share_token

        token = await self.database.run(work)
        logger.info("Workout %s shared by user %s", workout_id, user_id)
        return token

    async def revoke_share(self, user_id: uuid.UUID, workout_id: uuid.UUID) -> None:
        def work(db: Session) -> None:
            owned_workout(db, user_id, workout_id).share_token = None

        await self.database.run(work)
        logger.info("Share revoked for workout %s", workout_id)

    async def find_shared(self, token: str) -> SharedWorkout:
        def work(db: Session) -> SharedWorkout:
            row = db.execute(
                select(Workout, User.username)
                .join(User, User.id == Workout.user_id)
                .where(Workout.share_token == token)
            ).first()
            if row is None:
                raise NotFoundError("Shared workout not found")
            workout, username = row
            return SharedWorkout(
                username=username,
                date=workout.date,
                notes=workout.notes,
                logs=annotate_logs(db, workout.user_id, workout_logs(db, workout.id)),
            )

        return await self.database.run(work)

    # -- statistics -------------------------------------------------------

    async def summary(self, user_id: uuid.UUID) -> TrainingSummary:
        """Workout counts over the last 7 and 30 days, and last-7-day volume (weight x reps)."""
        today = self.clock().date()
        week_start = today - timedelta(days=7)
        month_start = today - timedelta(days=30)

        def work(db: Session) -> TrainingSummary:
            def count_since(start) -> int:
                stmt = select(func.count(Workout.id)).where(Workout.user_id == user_id)
                if start is not None:
                    stmt = stmt.where(Workout.date >= start)
                return db.execute(stmt).scalar_one()

            volume = db.execute(
                select(func.coalesce(func.sum(WorkoutLog.weight * WorkoutLog.reps), 0.0))
                .join(Workout, Workout.id == WorkoutLog.session_id)
                .where(Workout.user_id == user_id, Workout.date >= week_start)
            ).scalar_one()
            return TrainingSummary(
                workouts_this_week=count_since(week_start),
                workouts_this_month=count_since(month_start),
                volume_this_week=float(volume),
                total_workouts=count_since(None),
            )

        return await self.database.run(work)
