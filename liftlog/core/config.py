"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "LiftLog"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Database (SQLite file by default; any SQLAlchemy sync URL works)
    database_url: str = "sqlite:///./liftlog.db"

    # Pool: the worker limiter is sized to pool_size + max_overflow
    database_pool_size: int = 5
    database_max_overflow: int = 0
    database_pool_timeout: int = 30

    # Sessions
    session_backend: Literal["store", "signed"] = "store"
    secret_key: str = ""  # Required for the signed backend - never commit
    session_lifetime_days: int = 7
    session_cleanup_interval_seconds: int = 3600

    # Cookie: secure=True in production (HTTPS only)
    cookie_secure: bool = False
    login_path: str = "/auth/login"

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    @property
    def max_workers(self) -> int:
        """Blocking workers allowed at once; one per pooled connection."""
        return max(1, self.database_pool_size + self.database_max_overflow)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_in_memory_sqlite(self) -> bool:
        """In-memory SQLite gets a singleton pool that takes no sizing options."""
        if not self.is_sqlite:
            return False
        path = self.database_url.split("://", 1)[-1]
        return path in ("", "/") or ":memory:" in path or "mode=memory" in path


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
