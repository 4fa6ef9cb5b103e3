"""Public read-only view of a shared workout."""

from fastapi import APIRouter, Depends

from liftlog.api.deps import get_workout_store
from liftlog.schemas.workout import SharedWorkout
from liftlog.services.workout_store import WorkoutStore

router = APIRouter()


@router.get("/{token}", response_model=SharedWorkout)
async def view_shared(token: str, workouts: WorkoutStore = Depends(get_workout_store)):
    return await workouts.find_shared(token)
