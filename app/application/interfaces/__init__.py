"""Application interfaces (ports): repository and service protocols."""

from app.application.interfaces.repositories import (
    IDirectoryRepository,
    IReminderRuleRepository,
    ITaskRepository,
    IWebhookSubscriptionRepository,
    IWorkflowDefinitionRepository,
    IWorkflowExecutionRepository,
)
from app.application.interfaces.services import (
    IDenormalizationResolver,
    IEventPublisher,
    IExecutionNotifier,
    IWebhookDispatcher,
    IWorkflowEnqueuer,
)

__all__ = [
    "IDenormalizationResolver",
    "IDirectoryRepository",
    "IEventPublisher",
    "IExecutionNotifier",
    "IReminderRuleRepository",
    "ITaskRepository",
    "IWebhookDispatcher",
    "IWebhookSubscriptionRepository",
    "IWorkflowDefinitionRepository",
    "IWorkflowEnqueuer",
    "IWorkflowExecutionRepository",
]
