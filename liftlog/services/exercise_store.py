"""Exercise catalogue: shared defaults plus each user's custom exercises."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from liftlog.core.enums import ExerciseCategory
from liftlog.core.errors import ConflictError, NotFoundError
from liftlog.db.bridge import Database
from liftlog.models.exercise import Exercise
from liftlog.models.workout import WorkoutLog
from liftlog.schemas.exercise import ExerciseCreate, ExerciseUpdate

logger = logging.getLogger(__name__)


def visible_exercise(db: Session, user_id: uuid.UUID, exercise_id: uuid.UUID) -> Exercise:
    """Default or owned exercise, else 404 (another user's custom one is not revealed)."""
    exercise = db.get(Exercise, exercise_id)
    if exercise is None or not exercise.is_visible_to(user_id):
        raise NotFoundError("Exercise not found")
    return exercise


def owned_exercise(db: Session, user_id: uuid.UUID, exercise_id: uuid.UUID) -> Exercise:
    exercise = db.get(Exercise, exercise_id)
    if exercise is None or not exercise.is_owned_by(user_id):
        raise NotFoundError("Exercise not found")
    return exercise


class ExerciseStore:
    def __init__(self, database: Database):
        self.database = database

    async def list_visible(self, user_id: uuid.UUID) -> list[Exercise]:
        def work(db: Session) -> list[Exercise]:
            stmt = (
                select(Exercise)
                .where(or_(Exercise.is_default.is_(True), Exercise.user_id == user_id))
                .order_by(Exercise.category, Exercise.name)
            )
            return list(db.execute(stmt).scalars().all())

        return await self.database.run(work)

    async def by_category(self, user_id: uuid.UUID) -> list[tuple[ExerciseCategory, list[Exercise]]]:
        """Visible exercises grouped in the fixed category order; empty categories included."""
        exercises = await self.list_visible(user_id)
        grouped: dict[str, list[Exercise]] = {category.value: [] for category in ExerciseCategory}
        for exercise in exercises:
            grouped.setdefault(exercise.category, []).append(exercise)
        return [(category, grouped[category.value]) for category in ExerciseCategory]

    async def get(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> Exercise:
        return await self.database.run(lambda db: visible_exercise(db, user_id, exercise_id))

    async def create(self, user_id: uuid.UUID, payload: ExerciseCreate) -> Exercise:
        def work(db: Session) -> Exercise:
            exercise = Exercise(
                name=payload.name.strip(),
                category=payload.category.value,
                muscle_group=payload.muscle_group,
                equipment=payload.equipment,
                is_default=False,
                user_id=user_id,
            )
            db.add(exercise)
            db.flush()
            return exercise

        return await self.database.run(work)

    async def update(self, user_id: uuid.UUID, exercise_id: uuid.UUID, payload: ExerciseUpdate) -> Exercise:
        """Partial update of a custom exercise; defaults are read-only."""

        def work(db: Session) -> Exercise:
            exercise = owned_exercise(db, user_id, exercise_id)
            for key, value in payload.model_dump(exclude_unset=True).items():
                if value is None and key != "equipment":
                    continue
                if key == "category":
                    value = ExerciseCategory(value).value
                setattr(exercise, key, value)
            db.flush()
            return exercise

        return await self.database.run(work)

    async def delete(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> None:
        def work(db: Session) -> None:
            exercise = owned_exercise(db, user_id, exercise_id)
            in_use = db.execute(select(WorkoutLog.id).where(WorkoutLog.exercise_id == exercise_id).limit(1)).first()
            if in_use is not None:
                raise ConflictError("Exercise has logged sets and cannot be deleted")
            db.delete(exercise)

        await self.database.run(work)
        logger.info("Deleted exercise %s for user %s", exercise_id, user_id)
