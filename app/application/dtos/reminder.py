"""DTOs for reminder rules and sweep runs (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.entities.reminder import ReminderSchedule
from app.domain.value_objects.core import ReminderOffset


@dataclass(frozen=True)
class ReminderRuleResult:
    id: str
    task_id: str
    reference_type: str
    custom_datetime: datetime | None
    offset_direction: str
    offset_amount: int
    offset_unit: str
    calculated_fire_time: datetime | None
    is_sent: bool
    sent_at: datetime | None
    created_at: datetime
    updated_at: datetime

    def to_schedule(self) -> ReminderSchedule:
        return ReminderSchedule(
            reference_type=self.reference_type,
            offset=ReminderOffset(
                direction=self.offset_direction,
                amount=self.offset_amount,
                unit=self.offset_unit,
            ),
            custom_datetime=self.custom_datetime,
        )


@dataclass(frozen=True)
class ReminderRuleCreate:
    task_id: str
    reference_type: str
    offset_direction: str
    offset_amount: int
    offset_unit: str
    custom_datetime: datetime | None = None


@dataclass(frozen=True)
class SweepResult:
    """Reminders fired by one sweep, in fire-time order."""

    processed_count: int = 0
    reminder_ids: list[str] = field(default_factory=list)
