"""Statistics and personal records."""

import uuid

from fastapi import APIRouter, Depends

from liftlog.api.deps import AuthUser, get_auth_user, get_exercise_store, get_pr_engine, get_workout_store
from liftlog.schemas.exercise import ExerciseRead
from liftlog.schemas.stats import ExerciseStats, PersonalRecord, StatsOverview
from liftlog.services.exercise_store import ExerciseStore
from liftlog.services.personal_records import PersonalRecordEngine
from liftlog.services.workout_store import WorkoutStore

router = APIRouter()


@router.get("", response_model=StatsOverview)
async def overview(
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
    prs: PersonalRecordEngine = Depends(get_pr_engine),
):
    summary = await workouts.summary(user.id)
    return StatsOverview(
        workouts_this_week=summary.workouts_this_week,
        workouts_this_month=summary.workouts_this_month,
        volume_this_week=summary.volume_this_week,
        total_workouts=summary.total_workouts,
        prs=await prs.all_prs(user.id),
    )


@router.get("/prs", response_model=list[PersonalRecord])
async def personal_records(
    user: AuthUser = Depends(get_auth_user),
    prs: PersonalRecordEngine = Depends(get_pr_engine),
):
    """Current PR per exercise, most recently set first."""
    return await prs.all_prs(user.id)


@router.get("/exercise/{exercise_id}", response_model=ExerciseStats)
async def exercise_stats(
    exercise_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    exercises: ExerciseStore = Depends(get_exercise_store),
    prs: PersonalRecordEngine = Depends(get_pr_engine),
):
    exercise = await exercises.get(user.id, exercise_id)
    return ExerciseStats(
        exercise=ExerciseRead.model_validate(exercise),
        current_pr=await prs.current_pr(user.id, exercise_id),
        history=await prs.exercise_history(user.id, exercise_id),
    )
