"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, dispatcher,
enqueuer, notifier).
"""

from app.application.services import (
    DenormalizationResolver,
    EventPayloadBuilder,
    ReminderCalculator,
)
from app.application.use_cases import (
    ReminderRuleService,
    ReportMutationService,
    TaskService,
)

__all__ = [
    "DenormalizationResolver",
    "EventPayloadBuilder",
    "ReminderCalculator",
    "ReminderRuleService",
    "ReportMutationService",
    "TaskService",
]
