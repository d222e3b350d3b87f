"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.webhook import DeliveryResult
    from app.domain.entities.change_event import ChangeEvent


class IEventPublisher(Protocol):
    """Hands a built change event to delivery without waiting for it."""

    def publish(self, event: ChangeEvent) -> bool:
        """Return False when the event was dropped instead of queued."""


class IDenormalizationResolver(Protocol):
    """Fills display fields from referenced records before a write."""

    async def resolve(self, entity_type: str, fields: dict[str, Any]) -> dict[str, Any]: ...


class IWebhookDispatcher(Protocol):
    """Delivers an envelope to every active subscription for its trigger_event."""

    async def dispatch(self, event: ChangeEvent) -> list[DeliveryResult]: ...


class IWorkflowEnqueuer(Protocol):
    """Creates pending workflow executions for definitions triggered by an event."""

    async def enqueue(self, event: ChangeEvent) -> list[str]: ...


class IExecutionNotifier(Protocol):
    """Signals the external workflow runner that a new execution is pending."""

    async def notify(
        self, execution_id: str, workflow_id: str, trigger_type: str
    ) -> bool: ...
