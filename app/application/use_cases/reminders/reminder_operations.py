"""Reminder rule CRUD; every create and update recomputes the fire time."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from app.application.dtos.reminder import ReminderRuleCreate
from app.application.services.reminder_calculator import ReminderCalculator
from app.domain.entities.reminder import ReminderSchedule
from app.domain.enums import ReferenceType
from app.domain.exceptions import ResourceNotFoundException
from app.domain.value_objects.core import ReminderOffset

if TYPE_CHECKING:
    from app.application.dtos.reminder import ReminderRuleResult
    from app.application.interfaces.repositories import (
        IReminderRuleRepository,
        ITaskRepository,
    )

_EDITABLE = (
    "reference_type",
    "custom_datetime",
    "offset_direction",
    "offset_amount",
    "offset_unit",
)


def _schedule_of(fields: dict[str, Any]) -> ReminderSchedule:
    """Build (and so validate) the schedule described by rule fields."""
    return ReminderSchedule(
        reference_type=fields["reference_type"],
        offset=ReminderOffset(
            direction=fields["offset_direction"],
            amount=fields["offset_amount"],
            unit=fields["offset_unit"],
        ),
        custom_datetime=fields.get("custom_datetime"),
    )


class ReminderRuleService:
    """Creates, edits and removes reminder rules of tasks."""

    def __init__(
        self,
        reminder_repo: IReminderRuleRepository,
        task_repo: ITaskRepository,
        calculator: ReminderCalculator | None = None,
    ) -> None:
        self.reminder_repo = reminder_repo
        self.task_repo = task_repo
        self.calculator = calculator or ReminderCalculator()

    async def create_rule(self, data: ReminderRuleCreate) -> ReminderRuleResult:
        """Create a rule for an existing task.

        Raises:
            ResourceNotFoundException: Task does not exist.
            ReminderRuleException: custom_datetime does not match reference_type.
            ValidationException: Negative offset.
        """
        task = await self.task_repo.get_by_id(data.task_id)
        if task is None:
            raise ResourceNotFoundException("task", data.task_id)
        schedule = _schedule_of(asdict(data))
        fire_time = self.calculator.calculate(schedule, task)
        return await self.reminder_repo.create_rule(data, fire_time)

    async def get_rule(self, rule_id: str) -> ReminderRuleResult:
        rule = await self.reminder_repo.get_rule(rule_id)
        if rule is None:
            raise ResourceNotFoundException("reminder", rule_id)
        return rule

    async def update_rule(self, rule_id: str, changes: dict[str, Any]) -> ReminderRuleResult:
        """Edit a rule. Sent rules keep is_sent; they do not fire again.

        Switching away from a custom anchor drops the custom datetime
        unless one is given explicitly.
        """
        rule = await self.get_rule(rule_id)
        changes = {k: v for k, v in changes.items() if k in _EDITABLE}
        if (
            "reference_type" in changes
            and changes["reference_type"] != ReferenceType.CUSTOM.value
            and "custom_datetime" not in changes
        ):
            changes["custom_datetime"] = None
        merged = {field: getattr(rule, field) for field in _EDITABLE} | changes
        schedule = _schedule_of(merged)
        task = await self.task_repo.get_by_id(rule.task_id)
        fire_time = self.calculator.calculate(schedule, task)
        updated = await self.reminder_repo.update_rule(rule_id, changes, fire_time)
        if updated is None:
            raise ResourceNotFoundException("reminder", rule_id)
        return updated

    async def delete_rule(self, rule_id: str) -> None:
        if not await self.reminder_repo.delete_rule(rule_id):
            raise ResourceNotFoundException("reminder", rule_id)

    async def list_for_task(self, task_id: str) -> list[ReminderRuleResult]:
        if await self.task_repo.get_by_id(task_id) is None:
            raise ResourceNotFoundException("task", task_id)
        return await self.reminder_repo.list_by_task(task_id)
