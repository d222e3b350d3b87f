"""Application use cases: one entry point per workflow."""

from app.application.use_cases.mutations import ReportMutationService
from app.application.use_cases.reminders import ReminderRuleService
from app.application.use_cases.tasks import TaskService

__all__ = [
    "ReminderRuleService",
    "ReportMutationService",
    "TaskService",
]
