"""ReminderCalculator tests: fire time per anchor and anchor-change detection."""

from datetime import datetime, timezone
from types import SimpleNamespace

from app.application.services.reminder_calculator import ReminderCalculator
from app.domain.entities.reminder import ReminderSchedule
from app.domain.value_objects.core import ReminderOffset

UTC = timezone.utc
START = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)
DUE = datetime(2026, 3, 12, 17, 0, tzinfo=UTC)


def _task(start=START, due=DUE) -> SimpleNamespace:
    return SimpleNamespace(start_date=start, due_date=due)


def test_due_anchor_before() -> None:
    schedule = ReminderSchedule("due", ReminderOffset("before", 2, "hours"))
    assert ReminderCalculator().calculate(schedule, _task()) == datetime(
        2026, 3, 12, 15, 0, tzinfo=UTC
    )


def test_start_anchor_after() -> None:
    schedule = ReminderSchedule("start", ReminderOffset("after", 30, "minutes"))
    assert ReminderCalculator().calculate(schedule, _task()) == datetime(
        2026, 3, 1, 9, 30, tzinfo=UTC
    )


def test_missing_anchor_gives_no_fire_time() -> None:
    schedule = ReminderSchedule("due", ReminderOffset("before", 1, "days"))
    assert ReminderCalculator().calculate(schedule, _task(due=None)) is None
    assert ReminderCalculator().calculate(schedule, None) is None


def test_custom_anchor_ignores_parent() -> None:
    custom = datetime(2026, 6, 1, 8, 0, tzinfo=UTC)
    schedule = ReminderSchedule(
        "custom", ReminderOffset("before", 1, "days"), custom_datetime=custom
    )
    assert ReminderCalculator().calculate(schedule, None) == datetime(
        2026, 5, 31, 8, 0, tzinfo=UTC
    )


def test_anchors_changed() -> None:
    assert not ReminderCalculator.anchors_changed(_task(), _task())
    assert ReminderCalculator.anchors_changed(_task(), _task(due=None))
    assert ReminderCalculator.anchors_changed(_task(start=None), _task())
    naive_same = _task(start=START.replace(tzinfo=None))
    assert not ReminderCalculator.anchors_changed(naive_same, _task())
