"""Health check endpoints for load balancers and monitoring."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text

from liftlog.api.deps import get_database
from liftlog.core.errors import AppError
from liftlog.db.bridge import Database

router = APIRouter()


@router.get("")
async def health():
    """Liveness only; does not touch the database."""
    return {"status": "ok"}


@router.get("/ready")
async def readiness(database: Database = Depends(get_database)):
    """Readiness: app + DB connectivity."""
    try:
        await database.run(lambda db: db.execute(text("SELECT 1")).scalar_one())
        return {"status": "ok", "database": "connected"}
    except AppError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": e.client_message},
        )
