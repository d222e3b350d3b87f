"""Application services: event building, denormalization, reminder timing."""

from app.application.services.denormalization_resolver import DenormalizationResolver
from app.application.services.entity_adapters import (
    ENTITY_ADAPTERS,
    TASK_REMINDER,
    EntityAdapter,
    get_adapter,
)
from app.application.services.event_payload_builder import EventPayloadBuilder
from app.application.services.reminder_calculator import ReminderCalculator

__all__ = [
    "ENTITY_ADAPTERS",
    "TASK_REMINDER",
    "DenormalizationResolver",
    "EntityAdapter",
    "EventPayloadBuilder",
    "ReminderCalculator",
    "get_adapter",
]
