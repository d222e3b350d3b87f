"""API dependencies. Composition root: routes get repositories and use cases from here."""

from .dispatch import (
    get_direct_publisher,
    get_dispatch_runtime,
    get_event_publisher,
    get_reminder_sweep,
)
from .task import (
    get_reminder_service,
    get_reminder_service_for_read,
    get_report_mutation_service,
    get_task_repo,
    get_task_service,
)
from .webhook import get_webhook_repo, get_webhook_repo_for_write
from .workflow import (
    get_workflow_execution_repo,
    get_workflow_repo,
    get_workflow_repo_for_write,
)

__all__ = [
    "get_direct_publisher",
    "get_dispatch_runtime",
    "get_event_publisher",
    "get_reminder_service",
    "get_reminder_service_for_read",
    "get_reminder_sweep",
    "get_report_mutation_service",
    "get_task_repo",
    "get_task_service",
    "get_webhook_repo",
    "get_webhook_repo_for_write",
    "get_workflow_execution_repo",
    "get_workflow_repo",
    "get_workflow_repo_for_write",
]
