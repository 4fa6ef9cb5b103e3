"""Workout and set logging endpoints. Logs come back PR-annotated."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from liftlog.api.deps import AuthUser, get_auth_user, get_workout_store
from liftlog.schemas.user import MessageResponse
from liftlog.schemas.workout import (
    AnnotatedLog,
    WorkoutCreate,
    WorkoutDetail,
    WorkoutLogCreate,
    WorkoutLogUpdate,
    WorkoutPage,
    WorkoutRead,
    WorkoutUpdate,
)
from liftlog.services.workout_store import WorkoutStore

router = APIRouter()


@router.get("", response_model=WorkoutPage)
async def list_workouts(
    page: int = Query(1, ge=1),
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    """The caller's workouts, newest first, one page at a time."""
    return await workouts.list_page(user.id, page)


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    return await workouts.create(user.id, payload)


@router.get("/{workout_id}", response_model=WorkoutDetail)
async def get_workout(
    workout_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    return await workouts.detail(user.id, workout_id)


@router.post("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    return await workouts.update(user.id, workout_id, payload)


@router.post("/{workout_id}/delete", response_model=MessageResponse)
async def delete_workout(
    workout_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    """Delete a workout and all its sets."""
    await workouts.delete(user.id, workout_id)
    return MessageResponse(message="Workout deleted")


# --- Sets ---


@router.post("/{workout_id}/logs", response_model=AnnotatedLog, status_code=201)
async def add_log(
    workout_id: uuid.UUID,
    payload: WorkoutLogCreate,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    """Log a set; the set number is the next one for this exercise in this workout."""
    return await workouts.add_log(user.id, workout_id, payload)


@router.post("/{workout_id}/logs/{log_id}", response_model=AnnotatedLog)
async def update_log(
    workout_id: uuid.UUID,
    log_id: uuid.UUID,
    payload: WorkoutLogUpdate,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    return await workouts.update_log(user.id, workout_id, log_id, payload)


@router.post("/{workout_id}/logs/{log_id}/delete", response_model=MessageResponse)
async def delete_log(
    workout_id: uuid.UUID,
    log_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    await workouts.delete_log(user.id, workout_id, log_id)
    return MessageResponse(message="Set deleted")


# --- Sharing ---


@router.post("/{workout_id}/share")
async def share_workout(
    workout_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    token = await workouts.share(user.id, workout_id)
    return {"share_token": token, "url": f"/shared/{token}"}


@router.post("/{workout_id}/share/revoke", response_model=MessageResponse)
async def revoke_share(
    workout_id: uuid.UUID,
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
):
    await workouts.revoke_share(user.id, workout_id)
    return MessageResponse(message="Share link revoked")
