"""Dispatch runtime dependencies: outbox publishers and the reminder sweep."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import DispatchEngineException
from app.infrastructure.messaging.outbox import (
    DirectOutboxPublisher,
    SessionOutboxPublisher,
)
from app.infrastructure.persistence.database import get_db_transactional
from app.infrastructure.services.reminder_sweep import ReminderSweep
from app.infrastructure.services.runtime import DispatchRuntime


def get_dispatch_runtime(request: Request) -> DispatchRuntime:
    """Runtime started by the lifespan; 503 when it is not running."""
    runtime = getattr(request.app.state, "dispatch", None)
    if runtime is None:
        raise DispatchEngineException(
            "Event dispatch is not running", "SERVICE_UNAVAILABLE"
        )
    return runtime


async def get_event_publisher(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    runtime: Annotated[DispatchRuntime, Depends(get_dispatch_runtime)],
) -> SessionOutboxPublisher:
    """Publisher bound to the request transaction (events released on commit)."""
    return SessionOutboxPublisher(db, runtime.outbox)


def get_direct_publisher(
    runtime: Annotated[DispatchRuntime, Depends(get_dispatch_runtime)],
) -> DirectOutboxPublisher:
    """Publisher for mutations already committed elsewhere."""
    return DirectOutboxPublisher(runtime.outbox)


def get_reminder_sweep(
    runtime: Annotated[DispatchRuntime, Depends(get_dispatch_runtime)],
) -> ReminderSweep:
    return runtime.sweep
