from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, split_csv

# DATABASE_LOG_LEVEL is a coarse switch for SQL logging (silent/error/warn/info);
# each value maps to a level of the `sqlalchemy.engine` logger.
_DATABASE_LOG_LEVELS = {
    "silent": "CRITICAL",
    "error": "ERROR",
    "warn": "WARNING",
    "info": "INFO",
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment.

    API and database connection settings have no defaults: a deployment that forgets
    one of them fails at startup instead of silently talking to the wrong database.
    """

    # API
    API_ENVIRONMENT: Literal["development", "test", "staging", "production"]
    API_HOST: str
    API_PORT: int

    # Database configuration
    DATABASE_DRIVER: str = "postgresql+asyncpg"
    DATABASE_HOST: str
    DATABASE_PORT: int
    DATABASE_USER: str
    DATABASE_PASSWORD: str
    DATABASE_NAME: str
    DATABASE_LOG_LEVEL: Literal["silent", "error", "warn", "info"] = "warn"

    # Full DSN override (e.g. "sqlite+aiosqlite:///./bookshelf.db" for local runs)
    DATABASE_DSN: str | None = None

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/bookshelf")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5

    # HTTP middleware
    CORS_ALLOWED_ORIGINS: str = "*"
    RATE_LIMIT_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    THROTTLE_MAX_IN_FLIGHT: int = 100  # across all clients
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the SQLAlchemy URL for the application database.

        `DATABASE_DSN` wins when set; otherwise the URL is assembled from the
        individual DATABASE_* parts using `DATABASE_DRIVER` as the scheme.
        """
        if self.DATABASE_DSN:
            return self.DATABASE_DSN

        return (
            f"{self.DATABASE_DRIVER}://"
            f"{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@"
            f"{self.DATABASE_HOST}:{self.DATABASE_PORT}/"
            f"{self.DATABASE_NAME}"
        )

    @property
    def SQL_LOG_LEVEL(self) -> str:
        """Logging level name for the `sqlalchemy.engine` logger."""
        return _DATABASE_LOG_LEVELS[self.DATABASE_LOG_LEVEL]

    @property
    def CORS_ORIGINS(self) -> list[str]:
        return split_csv(self.CORS_ALLOWED_ORIGINS)

    @property
    def DOCS_ENABLED(self) -> bool:
        # interactive API docs are only served in development
        return self.API_ENVIRONMENT == "development"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check runs, so
        `LOG_LEVEL=info` is accepted the same as `LOG_LEVEL=INFO`.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", "API_ENVIRONMENT", "DATABASE_LOG_LEVEL", mode="before")
    def normalize_lowercase(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the environment on every call.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
