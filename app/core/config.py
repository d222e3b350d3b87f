"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. DATABASE_URL is validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "crm-dispatch"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = ""
    database_echo: bool = False
    # Optional pool overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Webhook delivery: single attempt, bounded by timeout
    webhook_timeout_seconds: float = 10.0
    webhook_max_concurrency: int = 20

    # In-process outbox between committed mutations and delivery
    outbox_workers: int = 4
    outbox_max_size: int = 10_000

    # Reminder sweep
    reminder_sweep_batch_size: int = 500
    # Reminder envelopes go to webhooks only unless enabled
    reminder_fanout_workflows: bool = False

    # Workflow execution notifications (Redis pub/sub channel)
    execution_channel: str = "workflow_execution"

    # Redis
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # OpenTelemetry
    telemetry_enabled: bool = True
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
    def validate_required(self) -> "Settings":
        """Validate required env and numeric bounds."""
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL is required. Set in environment or .env file."
            )
        if self.webhook_timeout_seconds <= 0:
            raise ValueError("WEBHOOK_TIMEOUT_SECONDS must be positive")
        if self.webhook_max_concurrency < 1:
            raise ValueError("WEBHOOK_MAX_CONCURRENCY must be at least 1")
        if self.outbox_workers < 1:
            raise ValueError("OUTBOX_WORKERS must be at least 1")
        if self.reminder_sweep_batch_size < 1:
            raise ValueError("REMINDER_SWEEP_BATCH_SIZE must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
