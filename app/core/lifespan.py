"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (dispatch
runtime, telemetry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.infrastructure.services.runtime import DispatchRuntime

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), dispatch runtime (HTTP client,
    execution notifier, outbox workers). Shutdown order: outbox drain,
    HTTP client close, notifier disconnect, telemetry shutdown, SQL
    engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    telemetry = None
    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        telemetry.instrument_redis()
        telemetry.instrument_logging()
        logger.info("Telemetry initialized")

    session_factory = database.get_session_factory()
    if telemetry is not None:
        telemetry.instrument_sqlalchemy(database.engine)

    runtime = await DispatchRuntime.start(settings, session_factory)
    app.state.dispatch = runtime
    logger.info("Dispatch runtime started")

    yield

    # ---- Shutdown ----
    await runtime.stop()
    app.state.dispatch = None

    if telemetry is not None:
        telemetry.shutdown()

    await database.dispose_engine()
    logger.info("Database engine disposed")
