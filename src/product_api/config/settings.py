from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..database.url import to_async_url
from ..validators.config_validators import (
    to_uppercase,
    to_lowercase,
    blank_to_none,
    positive_int_or_default,
)

DEFAULT_MAX_PER_PAGE = 100


class MissingDatabaseURLError(RuntimeError):
    """Raised when neither DATABASE_URL nor POSTGRES_DSN is configured."""


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration. DATABASE_URL wins; POSTGRES_DSN is the documented fallback.
    DATABASE_URL: str | None = None
    POSTGRES_DSN: str | None = None

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = False

    # Pagination
    MAX_PER_PAGE: int = DEFAULT_MAX_PER_PAGE

    # Frontend type generation (never runs in production)
    GENERATE_FRONTEND_TYPES: bool = True
    FRONTEND_OUT_DIR: Path = Path("../frontend/src")

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/product-api")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        """
        Return the async SQLAlchemy URL built from DATABASE_URL (or POSTGRES_DSN).

        Plain `postgres://` / `postgresql://` DSNs are pointed at the asyncpg
        driver; URLs that already name a driver (or another backend such as
        `sqlite+aiosqlite://`) are used as given.

        Raises:
            MissingDatabaseURLError: If neither variable is set.
        """
        dsn = self.DATABASE_URL or self.POSTGRES_DSN
        if not dsn:
            raise MissingDatabaseURLError("DATABASE_URL or POSTGRES_DSN is not set")
        return to_async_url(dsn)

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase so "debug" and "DEBUG" are both accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("DATABASE_URL", "POSTGRES_DSN", mode="before")
    def empty_dsn_is_unset(cls, v: str | None) -> str | None:
        return blank_to_none(v)

    @field_validator("MAX_PER_PAGE", mode="before")
    def fallback_max_per_page(cls, v) -> int:
        """
        MAX_PER_PAGE must be a positive integer. Anything else (blank, "abc",
        "0", "-5") is ignored and the default limit is used instead of failing
        startup.
        """
        return positive_int_or_default(v, DEFAULT_MAX_PER_PAGE)

    # --- ConfigDict settings ---
    model_config = SettingsConfigDict(
        # Later files take priority: the repository-level .env (one dir up) wins over the CWD one.
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached. Tests build Settings(...) directly instead of going through the cache.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
