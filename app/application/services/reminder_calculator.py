"""Reminder fire-time calculation.

fire time = anchor -/+ offset, where the anchor is the rule's custom
datetime or the parent task's start/due date. A missing anchor yields
no fire time, so the rule is never picked by the sweep until a date is
set.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from app.domain.entities.reminder import ReminderSchedule
from app.shared.utils.datetime import as_utc_datetime


class ReminderAnchors(Protocol):
    """Parent dates a reminder can be anchored to."""

    start_date: datetime | None
    due_date: datetime | None


class ReminderCalculator:
    """Computes calculated_fire_time for reminder rules."""

    def calculate(
        self, schedule: ReminderSchedule, parent: ReminderAnchors | None
    ) -> datetime | None:
        start = parent.start_date if parent is not None else None
        due = parent.due_date if parent is not None else None
        return schedule.fire_time(start, due)

    @staticmethod
    def anchors_changed(before: ReminderAnchors, after: ReminderAnchors) -> bool:
        """Whether start_date or due_date differ (null-safe)."""
        return (
            as_utc_datetime(before.start_date) != as_utc_datetime(after.start_date)
            or as_utc_datetime(before.due_date) != as_utc_datetime(after.due_date)
        )
