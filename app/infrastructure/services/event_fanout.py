"""Outbox handler: sends one envelope to the webhook dispatcher and the
workflow enqueuer independently."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.services import (
        IWebhookDispatcher,
        IWorkflowEnqueuer,
    )
    from app.domain.entities.change_event import ChangeEvent

logger = get_logger(__name__)


class EventFanout:
    """Callable handed to DispatchOutbox."""

    def __init__(
        self,
        dispatcher: IWebhookDispatcher,
        enqueuer: IWorkflowEnqueuer | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.enqueuer = enqueuer

    async def __call__(self, event: ChangeEvent) -> None:
        targets = [self.dispatcher.dispatch(event)]
        if self.enqueuer is not None:
            targets.append(self.enqueuer.enqueue(event))
        for outcome in await asyncio.gather(*targets, return_exceptions=True):
            if isinstance(outcome, BaseException):
                logger.error(
                    "Delivery target failed for %s",
                    event.trigger_event,
                    exc_info=outcome,
                )
