"""Delivery runtime: the long-lived objects shared by requests and workers.

Built once per process (FastAPI lifespan or the sweep script): one
shared HTTP client, the execution notifier, the dispatcher and enqueuer,
the outbox whose workers feed them, and the reminder sweep.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.services import IExecutionNotifier
from app.core.config import Settings
from app.infrastructure.messaging.execution_notifier import (
    LogOnlyExecutionNotifier,
    RedisExecutionNotifier,
)
from app.infrastructure.messaging.outbox import DispatchOutbox
from app.infrastructure.services.event_fanout import EventFanout
from app.infrastructure.services.reminder_sweep import ReminderSweep
from app.infrastructure.services.webhook_dispatcher import WebhookDispatcher
from app.infrastructure.services.workflow_enqueuer import WorkflowEnqueuer
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


async def build_notifier(settings: Settings) -> IExecutionNotifier:
    """Redis notifier when enabled and reachable, otherwise log-only."""
    if settings.redis_enabled:
        notifier = RedisExecutionNotifier(channel=settings.execution_channel)
        await notifier.connect()
        if notifier.is_available():
            return notifier
        logger.warning("Redis unavailable; workflow executions will only be logged")
    return LogOnlyExecutionNotifier()


@dataclass
class DispatchRuntime:
    http_client: httpx.AsyncClient
    notifier: IExecutionNotifier
    dispatcher: WebhookDispatcher
    enqueuer: WorkflowEnqueuer
    outbox: DispatchOutbox
    sweep: ReminderSweep

    @classmethod
    async def start(
        cls,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        http_client: httpx.AsyncClient | None = None,
        notifier: IExecutionNotifier | None = None,
    ) -> DispatchRuntime:
        """Wire the components and start the outbox workers."""
        http_client = http_client or httpx.AsyncClient(
            timeout=settings.webhook_timeout_seconds
        )
        if notifier is None:
            notifier = await build_notifier(settings)
        dispatcher = WebhookDispatcher(
            session_factory,
            http_client,
            timeout_seconds=settings.webhook_timeout_seconds,
            max_concurrency=settings.webhook_max_concurrency,
        )
        enqueuer = WorkflowEnqueuer(session_factory, notifier)
        outbox = DispatchOutbox(
            EventFanout(dispatcher, enqueuer),
            workers=settings.outbox_workers,
            max_size=settings.outbox_max_size,
        )
        sweep = ReminderSweep(
            session_factory,
            dispatcher,
            enqueuer=enqueuer if settings.reminder_fanout_workflows else None,
            batch_size=settings.reminder_sweep_batch_size,
        )
        await outbox.start()
        return cls(
            http_client=http_client,
            notifier=notifier,
            dispatcher=dispatcher,
            enqueuer=enqueuer,
            outbox=outbox,
            sweep=sweep,
        )

    async def stop(self) -> None:
        """Drain the outbox, then close the HTTP client and the notifier."""
        await self.outbox.stop(drain=True)
        await self.http_client.aclose()
        if isinstance(self.notifier, RedisExecutionNotifier):
            await self.notifier.disconnect()
        logger.info("Dispatch runtime stopped")
