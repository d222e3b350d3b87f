"""Report a mutation of an externally stored entity: resolve, build, publish.

Entity stores that live outside this service (leads, contacts, tickets,
...) report each committed create/update/delete here. The envelope is
handed to the publisher; delivery never blocks or fails the report.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.application.services.entity_adapters import get_adapter
from app.domain.enums import OperationType
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.services import (
        IDenormalizationResolver,
        IEventPublisher,
    )
    from app.application.services.event_payload_builder import EventPayloadBuilder
    from app.domain.entities.change_event import ChangeEvent

logger = get_logger(__name__)


class ReportMutationService:
    """Generic mutation entry point shared by every entity kind."""

    def __init__(
        self,
        resolver: IDenormalizationResolver,
        builder: EventPayloadBuilder,
        publisher: IEventPublisher,
    ) -> None:
        self._resolver = resolver
        self._builder = builder
        self._publisher = publisher

    async def report(
        self,
        entity_type: str,
        operation: OperationType | str,
        fields: dict[str, Any],
        old_fields: dict[str, Any] | None = None,
    ) -> ChangeEvent | None:
        """Build and publish the envelope for one mutation.

        Returns:
            The queued event, or None when the entity emits nothing for
            this mutation or the outbox dropped the event.

        Raises:
            ValidationException: Unknown entity type or operation.
        """
        get_adapter(entity_type)
        operation = OperationType(operation)
        if operation is not OperationType.DELETE:
            fields = await self._resolver.resolve(entity_type, fields)
        event = self._builder.build(entity_type, operation, fields, old_fields)
        if event is None:
            logger.debug("No event for %s %s", entity_type, operation.value)
            return None
        if not self._publisher.publish(event):
            logger.warning(
                "%s for %s %s was not queued", event.trigger_event, entity_type, fields.get("id")
            )
            return None
        return event
