"""Task create/update/delete with display-field resolution, change events
and reminder maintenance.

On a start/due date change every unsent start- or due-anchored reminder
of the task is recalculated; sent and custom reminders are left alone.
Deleting a task deletes its reminders.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.application.services.reminder_calculator import ReminderCalculator
from app.domain.enums import EntityType, OperationType
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.task import TaskResult
    from app.application.interfaces.repositories import (
        IReminderRuleRepository,
        ITaskRepository,
    )
    from app.application.interfaces.services import (
        IDenormalizationResolver,
        IEventPublisher,
    )
    from app.application.services.event_payload_builder import EventPayloadBuilder

logger = get_logger(__name__)

_TASK = EntityType.TASK.value


class TaskService:
    """Task write path: resolve, persist, recalculate reminders, publish."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        reminder_repo: IReminderRuleRepository,
        resolver: IDenormalizationResolver,
        builder: EventPayloadBuilder,
        publisher: IEventPublisher,
        calculator: ReminderCalculator | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.reminder_repo = reminder_repo
        self.resolver = resolver
        self.builder = builder
        self.publisher = publisher
        self.calculator = calculator or ReminderCalculator()

    async def get_task(self, task_id: str) -> TaskResult:
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def create_task(self, fields: dict[str, Any]) -> TaskResult:
        if not fields.get("title"):
            raise ValidationException("Task title is required", field="title")
        resolved = await self.resolver.resolve(_TASK, fields)
        task = await self.task_repo.create_task(resolved)
        self._publish(OperationType.CREATE, {**resolved, **task.to_fields()})
        return task

    async def update_task(self, task_id: str, changes: dict[str, Any]) -> TaskResult:
        """Apply changes; recalculates reminders when an anchor date moved."""
        current = await self.get_task(task_id)
        if "title" in changes and not changes["title"]:
            raise ValidationException("Task title cannot be empty", field="title")
        resolved = await self.resolver.resolve(_TASK, {**current.to_fields(), **changes})
        updated = await self.task_repo.update_task(task_id, resolved)
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        if self.calculator.anchors_changed(current, updated):
            recalculated = await self.recalculate_reminders(updated)
            logger.info("Task %s dates changed; %d reminders recalculated", task_id, recalculated)
        self._publish(
            OperationType.UPDATE,
            {**resolved, **updated.to_fields()},
            current.to_fields(),
        )
        return updated

    async def delete_task(self, task_id: str) -> None:
        current = await self.get_task(task_id)
        removed = await self.reminder_repo.delete_by_task(task_id)
        await self.task_repo.delete_task(task_id)
        if removed:
            logger.info("Deleted %d reminders with task %s", removed, task_id)
        self._publish(OperationType.DELETE, current.to_fields())

    async def recalculate_reminders(self, task: TaskResult) -> int:
        """Recompute fire times of the task's unsent start/due reminders."""
        rules = await self.reminder_repo.list_recalculable(task.id)
        for rule in rules:
            fire_time = self.calculator.calculate(rule.to_schedule(), task)
            await self.reminder_repo.set_fire_time(rule.id, fire_time)
        return len(rules)

    def _publish(
        self,
        operation: OperationType,
        fields: dict[str, Any],
        old_fields: dict[str, Any] | None = None,
    ) -> None:
        event = self.builder.build(_TASK, operation, fields, old_fields)
        if event is not None:
            self.publisher.publish(event)
