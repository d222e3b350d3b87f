"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.event_fanout import EventFanout
from app.infrastructure.services.reminder_sweep import ReminderSweep
from app.infrastructure.services.runtime import DispatchRuntime
from app.infrastructure.services.webhook_dispatcher import WebhookDispatcher
from app.infrastructure.services.workflow_enqueuer import WorkflowEnqueuer

__all__ = [
    "DispatchRuntime",
    "EventFanout",
    "ReminderSweep",
    "WebhookDispatcher",
    "WorkflowEnqueuer",
]
