"""Service configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings with
.env support; inconsistent combinations are rejected at load time.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env.

    Everything has a default; the in-memory backend needs no configuration,
    the postgres backend requires DATABASE_URL.
    """

    # App
    app_name: str = "bookflow"
    app_version: str = "1.0.0"
    debug: bool = False

    # Persistence: "memory" (in-process) or "postgres" (SQLAlchemy + Alembic)
    database_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_command_timeout: int = 30

    # Trigger pipeline
    action_timeout_seconds: float = Field(default=15.0, gt=0)
    webhook_timeout_seconds: float = Field(default=10.0, gt=0)
    max_concurrent_workflows: int = Field(default=8, ge=1)

    # Booking service customer API used by update_customer actions
    customer_service_url: str | None = None
    customer_service_token: str | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """Postgres requires DATABASE_URL; action timeout must cover the webhook timeout."""
        if self.database_backend == "postgres":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when database_backend is 'postgres'. "
                    "Set in environment or .env file."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'memory' or 'postgres', got: {self.database_backend!r}"
            )
        if self.webhook_timeout_seconds > self.action_timeout_seconds:
            raise ValueError(
                "webhook_timeout_seconds must not exceed action_timeout_seconds"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (one instance per process).

    In tests, call get_settings.cache_clear() after changing env vars.
    """
    return Settings()
