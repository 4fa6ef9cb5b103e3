"""Dashboard: recent training at a glance."""

from fastapi import APIRouter, Depends

from liftlog.api.deps import AuthUser, get_auth_user, get_pr_engine, get_workout_store
from liftlog.core.constants import DASHBOARD_RECENT_PRS
from liftlog.schemas.stats import DashboardRead
from liftlog.schemas.workout import WorkoutRead
from liftlog.services.personal_records import PersonalRecordEngine
from liftlog.services.workout_store import WorkoutStore

router = APIRouter()


@router.get("/", response_model=DashboardRead)
async def dashboard(
    user: AuthUser = Depends(get_auth_user),
    workouts: WorkoutStore = Depends(get_workout_store),
    prs: PersonalRecordEngine = Depends(get_pr_engine),
):
    summary = await workouts.summary(user.id)
    recent = await workouts.recent(user.id)
    records = await prs.all_prs(user.id)
    return DashboardRead(
        username=user.username,
        workouts_this_week=summary.workouts_this_week,
        workouts_this_month=summary.workouts_this_month,
        volume_this_week=summary.volume_this_week,
        recent_workouts=[WorkoutRead.model_validate(w) for w in recent],
        recent_prs=records[:DASHBOARD_RECENT_PRS],
    )
