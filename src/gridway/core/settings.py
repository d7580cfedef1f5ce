"""Application settings and configuration.

This module defines all configuration options for the Grid Way service.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or a ``.env`` file.
    """

    # Application metadata
    app_name: str = Field(default="Grid Way", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./gridway.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # "sql" persists through SQLAlchemy; "memory" keeps a process-wide store.
    storage_backend: Literal["sql", "memory"] = Field(default="sql", alias="STORAGE_BACKEND")

    # When enabled a failed connection write rolls back the decision as well.
    atomic_connection_formation: bool = Field(
        default=False,
        alias="ATOMIC_CONNECTION_FORMATION",
    )

    # Card stack behaviour
    swipe_threshold: float = Field(default=1 / 3, gt=0, lt=1, alias="SWIPE_THRESHOLD")
    stack_peek_depth: int = Field(default=2, ge=0, alias="STACK_PEEK_DEPTH")

    # HTTP client used by the card stack dispatcher
    api_url: str = Field(default="http://localhost:8000", alias="GRIDWAY_API_URL")
    http_timeout_seconds: float = Field(default=10.0, alias="GRIDWAY_HTTP_TIMEOUT_SECONDS")

    # CORS configuration for the mobile web frontend
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
