"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    ActionNode,
    ChangeEvent,
    ReminderSchedule,
    TriggerNode,
    WorkflowDefinitionEntity,
)
from app.domain.enums import (
    EntityType,
    OperationType,
    ReferenceType,
    WorkflowStatus,
)
from app.domain.exceptions import (
    DispatchEngineException,
    ReminderRuleException,
    ResourceNotFoundException,
    ValidationException,
    WorkflowDefinitionException,
)
from app.domain.value_objects import ReminderOffset

__all__ = [
    # Entities
    "ActionNode",
    "ChangeEvent",
    "ReminderSchedule",
    "TriggerNode",
    "WorkflowDefinitionEntity",
    # Enums
    "EntityType",
    "OperationType",
    "ReferenceType",
    "WorkflowStatus",
    # Exceptions
    "DispatchEngineException",
    "ReminderRuleException",
    "ResourceNotFoundException",
    "ValidationException",
    "WorkflowDefinitionException",
    # Value objects
    "ReminderOffset",
]
