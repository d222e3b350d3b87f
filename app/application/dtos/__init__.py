"""Application DTOs (no ORM dependency)."""

from app.application.dtos.directory import DirectoryEntry
from app.application.dtos.reminder import (
    ReminderRuleCreate,
    ReminderRuleResult,
    SweepResult,
)
from app.application.dtos.task import TaskResult
from app.application.dtos.webhook import (
    DeliveryResult,
    WebhookSubscriptionCreate,
    WebhookSubscriptionResult,
)
from app.application.dtos.workflow import (
    WorkflowDefinitionResult,
    WorkflowExecutionCreate,
    WorkflowExecutionResult,
)

__all__ = [
    "DeliveryResult",
    "DirectoryEntry",
    "ReminderRuleCreate",
    "ReminderRuleResult",
    "SweepResult",
    "TaskResult",
    "WebhookSubscriptionCreate",
    "WebhookSubscriptionResult",
    "WorkflowDefinitionResult",
    "WorkflowExecutionCreate",
    "WorkflowExecutionResult",
]
