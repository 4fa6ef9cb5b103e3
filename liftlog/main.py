"""FastAPI application factory and lifespan."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from liftlog import __version__
from liftlog.api import api_router
from liftlog.core.config import Settings, get_settings
from liftlog.core.errors import AppError
from liftlog.core.logging_config import setup_logging
from liftlog.db.bridge import Database
from liftlog.db.session import create_db_engine
from liftlog.services.session_manager import SessionManager, build_session_manager

logger = logging.getLogger(__name__)


async def sweep_expired_sessions(sessions: SessionManager, interval_seconds: int) -> None:
    """Safety net for sessions nobody touches again; lookups already expire lazily."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = await sessions.cleanup_expired()
        except Exception:
            logger.exception("Session sweep failed")
            continue
        if removed:
            logger.info("Swept %d expired session record(s)", removed)


def create_application(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Build the app. Tests pass their own ``database``; it is left open on
    shutdown since the caller owns it.
    """
    settings = settings or get_settings()
    owns_database = database is None
    if database is None:
        database = Database(create_db_engine(settings), max_workers=settings.max_workers)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup: logging and the session sweep; shutdown: stop it and release the pool."""
        setup_logging(settings.app_name, settings.log_level)
        logger.info(
            "Starting %s (%s sessions, %d storage workers)",
            settings.app_name,
            settings.session_backend,
            database.max_workers,
        )
        sweeper = asyncio.create_task(
            sweep_expired_sessions(app.state.session_manager, settings.session_cleanup_interval_seconds)
        )
        yield
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        if owns_database:
            database.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.database = database
    app.state.session_manager = build_session_manager(database, settings)

    # CORS: allow localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if not exc.public:
            logger.error(
                "%s on %s %s: %s",
                type(exc).__name__,
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc,
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.client_message})

    app.include_router(api_router)
    return app


app = create_application()
