"""Router aggregation."""

from fastapi import APIRouter

from liftlog.api.endpoints import (
    auth,
    dashboard,
    exercises,
    health,
    settings,
    shared,
    stats,
    users,
    workouts,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(dashboard.router, tags=["dashboard"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])
api_router.include_router(shared.router, prefix="/shared", tags=["shared"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
