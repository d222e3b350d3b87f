"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.change_event import ChangeEvent
from app.domain.entities.reminder import ReminderSchedule, validate_reference_pairing
from app.domain.entities.workflow import (
    ActionNode,
    TriggerNode,
    WorkflowDefinitionEntity,
    WorkflowNode,
    parse_nodes,
)

__all__ = [
    "ActionNode",
    "ChangeEvent",
    "ReminderSchedule",
    "TriggerNode",
    "WorkflowDefinitionEntity",
    "WorkflowNode",
    "parse_nodes",
    "validate_reference_pairing",
]
