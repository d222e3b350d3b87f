"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.directory import DirectoryEntry
    from app.application.dtos.reminder import ReminderRuleCreate, ReminderRuleResult
    from app.application.dtos.task import TaskResult
    from app.application.dtos.webhook import (
        WebhookSubscriptionCreate,
        WebhookSubscriptionResult,
    )
    from app.application.dtos.workflow import (
        WorkflowDefinitionResult,
        WorkflowExecutionCreate,
        WorkflowExecutionResult,
    )
    from app.domain.entities.workflow import WorkflowDefinitionEntity


class IWebhookSubscriptionRepository(Protocol):
    """Protocol for webhook subscription storage.

    Statistics are only changed through record_attempt.
    """

    async def get_active_by_trigger(
        self, trigger_event: str
    ) -> list[WebhookSubscriptionResult]:
        """Return active subscriptions for the event name."""

    async def record_attempt(
        self, subscription_id: str, success: bool, attempted_at: datetime
    ) -> None:
        """Atomically bump total_calls and success_count or failure_count."""

    async def create_subscription(
        self, data: WebhookSubscriptionCreate
    ) -> WebhookSubscriptionResult: ...

    async def get_subscription(
        self, subscription_id: str
    ) -> WebhookSubscriptionResult | None: ...

    async def list_subscriptions(
        self, trigger_event: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[WebhookSubscriptionResult]: ...

    async def update_subscription(
        self, subscription_id: str, fields: dict[str, Any]
    ) -> WebhookSubscriptionResult | None: ...

    async def delete_subscription(self, subscription_id: str) -> bool: ...


class IWorkflowDefinitionRepository(Protocol):
    """Protocol for workflow definition storage."""

    async def get_active_definitions(self) -> list[WorkflowDefinitionEntity]:
        """Return active definitions with non-empty, parseable nodes."""

    async def create_definition(
        self,
        name: str,
        nodes: list[dict[str, Any]],
        status: str,
        description: str | None = None,
    ) -> WorkflowDefinitionResult: ...

    async def get_definition(self, workflow_id: str) -> WorkflowDefinitionResult | None: ...

    async def list_definitions(
        self, skip: int = 0, limit: int = 100
    ) -> list[WorkflowDefinitionResult]: ...

    async def update_definition(
        self, workflow_id: str, fields: dict[str, Any]
    ) -> WorkflowDefinitionResult | None: ...


class IWorkflowExecutionRepository(Protocol):
    """Protocol for workflow execution storage."""

    async def create_execution(
        self, data: WorkflowExecutionCreate
    ) -> WorkflowExecutionResult:
        """Insert a pending execution."""

    async def list_by_workflow(
        self, workflow_id: str, skip: int = 0, limit: int = 100
    ) -> list[WorkflowExecutionResult]: ...


class IReminderRuleRepository(Protocol):
    """Protocol for reminder rule storage."""

    async def create_rule(
        self, data: ReminderRuleCreate, calculated_fire_time: datetime | None
    ) -> ReminderRuleResult: ...

    async def get_rule(self, rule_id: str) -> ReminderRuleResult | None: ...

    async def list_by_task(self, task_id: str) -> list[ReminderRuleResult]: ...

    async def update_rule(
        self,
        rule_id: str,
        fields: dict[str, Any],
        calculated_fire_time: datetime | None,
    ) -> ReminderRuleResult | None: ...

    async def delete_rule(self, rule_id: str) -> bool: ...

    async def delete_by_task(self, task_id: str) -> int:
        """Delete every rule of a task; return the count removed."""

    async def list_recalculable(self, task_id: str) -> list[ReminderRuleResult]:
        """Return unsent start/due-anchored rules of the task."""

    async def set_fire_time(self, rule_id: str, fire_time: datetime | None) -> None: ...

    async def get_due(self, now: datetime, limit: int) -> list[ReminderRuleResult]:
        """Return unsent rules with fire time <= now, oldest fire time first."""

    async def claim(
        self, rule_id: str, sent_at: datetime, due_by: datetime
    ) -> ReminderRuleResult | None:
        """Mark the rule sent if still unsent and due by ``due_by``.

        Returns the claimed rule as stored, or None when another sweep won
        or the rule was rescheduled after selection.
        """


class ITaskRepository(Protocol):
    """Protocol for task storage."""

    async def create_task(self, fields: dict[str, Any]) -> TaskResult: ...

    async def get_by_id(self, task_id: str) -> TaskResult | None: ...

    async def list_tasks(self, skip: int = 0, limit: int = 100) -> list[TaskResult]: ...

    async def update_task(
        self, task_id: str, fields: dict[str, Any]
    ) -> TaskResult | None: ...

    async def delete_task(self, task_id: str) -> bool: ...


class IDirectoryRepository(Protocol):
    """Protocol for lookups of referenced records (admin users, contacts)."""

    async def lookup(self, kind: str, record_id: str) -> DirectoryEntry | None:
        """Return the record of the given kind, or None when missing."""
