"""Blocking storage driven from async handlers.

The storage engine is synchronous. ``Database.run`` executes a unit of work on
a worker thread so the event loop never blocks on I/O. At most
``max_workers`` units run at once, matching the connection pool, so a request
waits for a worker instead of timing out on the pool.

Each unit of work checks out one ``Session`` inside a transaction: commit on
success, rollback on error, connection returned either way before the awaiting
handler resumes. A cancelled request does not interrupt a unit already running.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from anyio import CapacityLimiter, to_thread
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.core.errors import AppError, StorageError, WorkerError
from liftlog.db.session import create_session_factory

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Database:
    """Pooled engine plus a bounded worker bridge."""

    def __init__(self, engine: Engine, max_workers: int = 5):
        self.engine = engine
        self.max_workers = max_workers
        self.session_factory = create_session_factory(engine)
        self._limiter: CapacityLimiter | None = None
        self._limiter_loop: asyncio.AbstractEventLoop | None = None

    def _get_limiter(self) -> CapacityLimiter:
        # A limiter belongs to one event loop; tests start a fresh loop per test.
        loop = asyncio.get_running_loop()
        if self._limiter is None or self._limiter_loop is not loop:
            self._limiter = CapacityLimiter(self.max_workers)
            self._limiter_loop = loop
        return self._limiter

    async def run(self, work: Callable[[Session], T]) -> T:
        """Run ``work(session)`` in one transaction on a worker thread."""

        def unit_of_work() -> T:
            with self.session_factory() as session, session.begin():
                return work(session)

        return await self._in_thread(unit_of_work, self._get_limiter())

    async def offload(self, fn: Callable[..., T], *args: Any) -> T:
        """Run CPU-bound work (password hashing) off the event loop, without a connection."""
        return await self._in_thread(lambda: fn(*args), None)

    async def _in_thread(self, fn: Callable[[], T], limiter: CapacityLimiter | None) -> T:
        outcome: dict[str, Any] = {}

        def call() -> None:
            try:
                outcome["result"] = fn()
            except Exception as exc:
                outcome["error"] = exc

        try:
            await to_thread.run_sync(call, limiter=limiter)
        except Exception as exc:
            # Only scheduling failures get here; errors from fn are captured above
            logger.error("Blocking worker failed to run: %s", exc)
            raise WorkerError() from exc

        error = outcome.get("error")
        if error is None:
            return outcome["result"]
        if isinstance(error, AppError):
            raise error
        # sqlite3 raises OverflowError while binding, outside SQLAlchemy's wrapping
        if isinstance(error, (SQLAlchemyError, OverflowError)):
            raise StorageError(f"{type(error).__name__}: {error}") from error
        raise error

    def dispose(self) -> None:
        self.engine.dispose()
