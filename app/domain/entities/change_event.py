"""Change event domain entity.

A change event describes one mutation of one business entity (or one
fired reminder). It is built once and handed unchanged to every
delivery target, so it is immutable.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic_core import to_jsonable_python

from app.domain.enums import OperationType
from app.domain.exceptions import ValidationException

# Envelope keys owned by the event itself; entity fields never override them.
RESERVED_KEYS = frozenset({"trigger_event", "previous", "deleted_at"})


@dataclass(frozen=True)
class ChangeEvent:
    """Immutable change event with exactly one trigger_event.

    previous_fields is only set for updates and deleted_at only for
    deletes. operation is None for synthetic events such as reminders.
    """

    trigger_event: str
    operation: OperationType | None
    entity_fields: dict[str, Any] = field(default_factory=dict)
    previous_fields: dict[str, Any] | None = None
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.trigger_event:
            raise ValidationException(
                "Change event requires a trigger_event", field="trigger_event"
            )
        if self.previous_fields is not None and self.operation is not OperationType.UPDATE:
            raise ValidationException(
                "previous_fields is only valid for updates", field="previous_fields"
            )
        if self.deleted_at is not None and self.operation is not OperationType.DELETE:
            raise ValidationException(
                "deleted_at is only valid for deletes", field="deleted_at"
            )

    def to_payload(self) -> dict[str, Any]:
        """Return the flat JSON-safe envelope sent to every target.

        Entity fields are flattened next to trigger_event; datetimes,
        dates, decimals and UUIDs become strings or numbers.
        """
        payload: dict[str, Any] = {"trigger_event": self.trigger_event}
        payload.update(
            (key, value)
            for key, value in self.entity_fields.items()
            if key not in RESERVED_KEYS
        )
        if self.previous_fields is not None:
            payload["previous"] = dict(self.previous_fields)
        if self.deleted_at is not None:
            payload["deleted_at"] = self.deleted_at
        return to_jsonable_python(payload)
