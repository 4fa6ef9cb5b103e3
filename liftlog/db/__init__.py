"""Database package: engine, session factory, worker bridge, base."""

from liftlog.db.bridge import Database
from liftlog.db.session import create_db_engine

__all__ = ["Database", "create_db_engine"]
