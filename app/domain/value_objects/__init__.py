"""Domain value objects and shared value types."""

from app.domain.value_objects.core import ReminderOffset

__all__ = ["ReminderOffset"]
