"""Exercise catalogue endpoints. Defaults are shared and read-only."""

import uuid

from fastapi import APIRouter, Depends

from liftlog.api.deps import AuthUser, get_auth_user, get_exercise_store
from liftlog.schemas.exercise import CategoryRead, ExerciseCreate, ExerciseRead, ExerciseUpdate
from liftlog.schemas.user import MessageResponse
from liftlog.services.exercise_store import ExerciseStore

router = APIRouter()


@router.get("", response_model=list[CategoryRead])
async def list_exercises(
    user: AuthUser = Depends(get_auth_user),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    """Defaults plus the caller's custom exercises, grouped by category."""
    grouped = await exercises.by_category(user.id)
    return [
        CategoryRead(name=category.value, exercises=[ExerciseRead.model_validate(e) for e in items])
        for category, items in grouped
    ]


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    user: AuthUser = Depends(get_auth_user),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    return await exercises.create(user.id, payload)


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    return await exercises.get(user.id, exercise_id)


@router.post("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    user: AuthUser = Depends(get_auth_user),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    """Partial update of one of the caller's custom exercises."""
    return await exercises.update(user.id, exercise_id, payload)


@router.post("/{exercise_id}/delete", response_model=MessageResponse)
async def delete_exercise(
    exercise_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    exercises: ExerciseStore = Depends(get_exercise_store),
):
    await exercises.delete(user.id, exercise_id)
    return MessageResponse(message="Exercise deleted")
