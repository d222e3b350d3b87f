"""Builds change-event envelopes from entity rows (pure, synchronous).

create/update/delete use the per-entity adapters; fired reminders get a
TASK_REMINDER envelope that embeds the parent task under task_* keys.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.application.services.entity_adapters import TASK_REMINDER, get_adapter
from app.domain.entities.change_event import ChangeEvent
from app.domain.enums import EntityType, OperationType
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.dtos.reminder import ReminderRuleResult

# Task row field -> key in the reminder envelope.
_REMINDER_TASK_KEYS: dict[str, str] = {
    "task_number": "task_readable_id",
    "title": "task_title",
    "description": "task_description",
    "status": "task_status",
    "priority": "task_priority",
    "category": "task_category",
    "assigned_to": "assigned_to",
    "assigned_to_name": "assigned_to_name",
    "assigned_by": "assigned_by",
    "assigned_by_name": "assigned_by_name",
    "contact_id": "contact_id",
    "contact_name": "contact_name",
    "contact_phone": "contact_phone",
    "due_date": "task_due_date",
    "start_date": "task_start_date",
    "estimated_hours": "task_estimated_hours",
    "progress_percentage": "task_progress_percentage",
}


class EventPayloadBuilder:
    """Turns one mutation into at most one ChangeEvent."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def build(
        self,
        entity_type: EntityType | str,
        operation: OperationType | str,
        fields: Mapping[str, Any],
        old_fields: Mapping[str, Any] | None = None,
    ) -> ChangeEvent | None:
        """Build the envelope for a mutation.

        Args:
            entity_type: Entity kind (must have an adapter).
            operation: create, update or delete.
            fields: Row after the mutation; for deletes, the removed row.
            old_fields: Row before an update.

        Returns:
            ChangeEvent, or None when the adapter declines the operation.

        Raises:
            ValidationException: Unknown entity type.
        """
        adapter = get_adapter(entity_type)
        operation = OperationType(operation)
        trigger_event = adapter.event_name_for(operation, fields, old_fields)
        if trigger_event is None:
            return None

        previous = None
        deleted_at = None
        if operation is OperationType.UPDATE:
            old = old_fields or {}
            previous = {name: old.get(name) for name in adapter.previous_fields}
        elif operation is OperationType.DELETE:
            deleted_at = self._clock()

        return ChangeEvent(
            trigger_event=trigger_event,
            operation=operation,
            entity_fields=dict(fields),
            previous_fields=previous,
            deleted_at=deleted_at,
        )

    def build_reminder(
        self,
        rule: ReminderRuleResult,
        task_fields: Mapping[str, Any],
        display: str,
    ) -> ChangeEvent:
        """Build the TASK_REMINDER envelope for a fired rule."""
        body: dict[str, Any] = {
            "reminder_id": rule.id,
            "task_id": rule.task_id,
        }
        for source, key in _REMINDER_TASK_KEYS.items():
            body[key] = task_fields.get(source)
        # Phones are resolved at emit time and not stored on the task.
        for key in ("assigned_to_phone", "assigned_by_phone"):
            if key in task_fields:
                body[key] = task_fields[key]
        body.update(
            reminder_type=rule.reference_type,
            reminder_custom_datetime=rule.custom_datetime,
            reminder_offset_timing=rule.offset_direction,
            reminder_offset_value=rule.offset_amount,
            reminder_offset_unit=rule.offset_unit,
            reminder_scheduled_time=rule.calculated_fire_time,
            reminder_display=display,
            created_at=rule.created_at,
        )
        return ChangeEvent(trigger_event=TASK_REMINDER, operation=None, entity_fields=body)
