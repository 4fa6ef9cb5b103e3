"""Personal records: derived from the logs on every read, never stored.

A user's PR for an exercise is the maximum logged weight. A log is a PR iff its
weight equals that maximum right now, so editing or deleting a log moves the
PR without any bookkeeping. Equal maxima are all marked.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from liftlog.core.constants import EXERCISE_HISTORY_LIMIT
from liftlog.core.timeutil import as_utc
from liftlog.db.bridge import Database
from liftlog.models.exercise import Exercise
from liftlog.models.workout import Workout, WorkoutLog
from liftlog.schemas.stats import PersonalRecord
from liftlog.schemas.workout import AnnotatedLog


def max_weights(db: Session, user_id: uuid.UUID, exercise_ids: Iterable[uuid.UUID] | None = None) -> dict[uuid.UUID, float]:
    """Current max weight per exercise for one user."""
    stmt = (
        select(WorkoutLog.exercise_id, func.max(WorkoutLog.weight))
        .join(Workout, Workout.id == WorkoutLog.session_id)
        .where(Workout.user_id == user_id)
        .group_by(WorkoutLog.exercise_id)
    )
    if exercise_ids is not None:
        ids = set(exercise_ids)
        if not ids:
            return {}
        stmt = stmt.where(WorkoutLog.exercise_id.in_(list(ids)))
    return {exercise_id: weight for exercise_id, weight in db.execute(stmt).all()}


def exercise_names(db: Session, exercise_ids: Iterable[uuid.UUID]) -> dict[uuid.UUID, str]:
    ids = set(exercise_ids)
    if not ids:
        return {}
    rows = db.execute(select(Exercise.id, Exercise.name).where(Exercise.id.in_(list(ids)))).all()
    return {exercise_id: name for exercise_id, name in rows}


def annotate_logs(db: Session, user_id: uuid.UUID, logs: Sequence[WorkoutLog]) -> list[AnnotatedLog]:
    exercise_ids = {log.exercise_id for log in logs}
    maxima = max_weights(db, user_id, exercise_ids)
    names = exercise_names(db, exercise_ids)
    return [
        AnnotatedLog(
            id=log.id,
            session_id=log.session_id,
            exercise_id=log.exercise_id,
            set_number=log.set_number,
            reps=log.reps,
            weight=log.weight,
            rpe=log.rpe,
            created_at=as_utc(log.created_at),
            exercise_name=names.get(log.exercise_id, ""),
            is_pr=maxima.get(log.exercise_id) == log.weight,
        )
        for log in logs
    ]


def personal_records(db: Session, user_id: uuid.UUID, exercise_id: uuid.UUID | None = None) -> list[PersonalRecord]:
    """
    PRs for every exercise the user has logged (or just ``exercise_id``).

    ``achieved_at`` is the newest log at the max weight. Sorted newest first.
    """
    maxima = max_weights(db, user_id, None if exercise_id is None else [exercise_id])
    if not maxima:
        return []
    best = (
        select(WorkoutLog.exercise_id.label("exercise_id"), func.max(WorkoutLog.weight).label("weight"))
        .join(Workout, Workout.id == WorkoutLog.session_id)
        .where(Workout.user_id == user_id, WorkoutLog.exercise_id.in_(list(maxima)))
        .group_by(WorkoutLog.exercise_id)
        .subquery()
    )
    rows = db.execute(
        select(WorkoutLog.exercise_id, WorkoutLog.weight, WorkoutLog.created_at, Exercise.name)
        .join(Workout, Workout.id == WorkoutLog.session_id)
        .join(Exercise, Exercise.id == WorkoutLog.exercise_id)
        .join(best, (best.c.exercise_id == WorkoutLog.exercise_id) & (best.c.weight == WorkoutLog.weight))
        .where(Workout.user_id == user_id)
        .order_by(WorkoutLog.created_at.desc())
    ).all()

    records: dict[uuid.UUID, PersonalRecord] = {}
    for ex_id, weight, created_at, name in rows:
        # Rows arrive newest first; the first hit per exercise wins ties
        if ex_id not in records:
            records[ex_id] = PersonalRecord(
                exercise_id=ex_id, exercise_name=name, value=weight, achieved_at=as_utc(created_at)
            )
    return sorted(records.values(), key=lambda pr: pr.achieved_at, reverse=True)


class PersonalRecordEngine:
    """Async entry points; each call is one unit of work on the bridge."""

    def __init__(self, database: Database):
        self.database = database

    async def current_pr(self, user_id: uuid.UUID, exercise_id: uuid.UUID) -> PersonalRecord | None:
        records = await self.database.run(lambda db: personal_records(db, user_id, exercise_id))
        return records[0] if records else None

    async def all_prs(self, user_id: uuid.UUID) -> list[PersonalRecord]:
        return await self.database.run(lambda db: personal_records(db, user_id))

    async def annotate(self, logs: Sequence[WorkoutLog]) -> list[AnnotatedLog]:
        """Mark each log against its own workout owner's maxima, in input order."""
        if not logs:
            return []

        def work(db: Session) -> list[AnnotatedLog]:
            workout_ids = list({log.session_id for log in logs})
            owners = dict(db.execute(select(Workout.id, Workout.user_id).where(Workout.id.in_(workout_ids))).all())
            annotated: dict[uuid.UUID, AnnotatedLog] = {}
            for owner in set(owners.values()):
                owned = [log for log in logs if owners.get(log.session_id) == owner]
                annotated.update((item.id, item) for item in annotate_logs(db, owner, owned))
            return [annotated[log.id] for log in logs if log.id in annotated]

        return await self.database.run(work)

    async def exercise_history(
        self, user_id: uuid.UUID, exercise_id: uuid.UUID, limit: int = EXERCISE_HISTORY_LIMIT
    ) -> list[AnnotatedLog]:
        """The user's latest sets of one exercise, newest first, PR-annotated."""

        def work(db: Session) -> list[AnnotatedLog]:
            logs = (
                db.execute(
                    select(WorkoutLog)
                    .join(Workout, Workout.id == WorkoutLog.session_id)
                    .where(Workout.user_id == user_id, WorkoutLog.exercise_id == exercise_id)
                    .order_by(WorkoutLog.created_at.desc())
                    .limit(limit)
                )
                .scalars()
                .all()
            )
            return annotate_logs(db, user_id, logs)

        return await self.database.run(work)
