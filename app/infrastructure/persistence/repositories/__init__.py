"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.directory_repo import DirectoryRepository
from app.infrastructure.persistence.repositories.reminder_repo import ReminderRuleRepository
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.webhook_repo import (
    WebhookSubscriptionRepository,
)
from app.infrastructure.persistence.repositories.workflow_repo import (
    WorkflowDefinitionRepository,
    WorkflowExecutionRepository,
)

__all__ = [
    "BaseRepository",
    "DirectoryRepository",
    "ReminderRuleRepository",
    "TaskRepository",
    "WebhookSubscriptionRepository",
    "WorkflowDefinitionRepository",
    "WorkflowExecutionRepository",
]
