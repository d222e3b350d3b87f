"""Shared enumerations for the dispatch engine.

Cross-cutting enums used by application and infrastructure (workflow
execution lifecycle). Domain-specific enums (entity types, reminder
offsets) live in app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowExecutionStatus(_ValuesMixin, str, Enum):
    """Workflow execution lifecycle status.

    The engine only ever writes PENDING; the external runner moves a run
    through the remaining states.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
