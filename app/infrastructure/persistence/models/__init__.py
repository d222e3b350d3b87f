"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.directory import AdminUser, Contact
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    RecordModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.reminder import ReminderRule
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.webhook import WebhookSubscription
from app.infrastructure.persistence.models.workflow import (
    WorkflowDefinition,
    WorkflowExecution,
)

__all__ = [
    "AdminUser",
    "Contact",
    "CuidMixin",
    "RecordModel",
    "ReminderRule",
    "Task",
    "TimestampMixin",
    "WebhookSubscription",
    "WorkflowDefinition",
    "WorkflowExecution",
]
