"""TaskService unit tests with mocked repositories and publisher."""

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.reminder import ReminderRuleResult
from app.application.dtos.task import TaskResult
from app.application.services.event_payload_builder import EventPayloadBuilder
from app.application.use_cases.tasks import TaskService
from app.domain.exceptions import ResourceNotFoundException, ValidationException

UTC = timezone.utc
NOW = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)
DUE = datetime(2026, 3, 12, 17, 0, tzinfo=UTC)


def _task(**overrides) -> TaskResult:
    values = dict(
        id="t1",
        task_number="TASK-10001",
        title="Call supplier",
        description=None,
        status="To Do",
        priority="Medium",
        category="Other",
        assigned_to="usr_ana",
        assigned_to_name="Ana Ortiz",
        assigned_by=None,
        assigned_by_name=None,
        contact_id=None,
        contact_name=None,
        contact_phone=None,
        start_date=None,
        due_date=DUE,
        completion_date=None,
        estimated_hours=None,
        actual_hours=None,
        progress_percentage=0,
        tags=[],
        notes=None,
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return TaskResult(**values)


def _rule(rule_id: str, **overrides) -> ReminderRuleResult:
    values = dict(
        id=rule_id,
        task_id="t1",
        reference_type="due",
        custom_datetime=None,
        offset_direction="before",
        offset_amount=2,
        offset_unit="hours",
        calculated_fire_time=datetime(2026, 3, 12, 15, 0, tzinfo=UTC),
        is_sent=False,
        sent_at=None,
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return ReminderRuleResult(**values)


@pytest.fixture
def mocks():
    task_repo = AsyncMock()
    reminder_repo = AsyncMock()
    resolver = AsyncMock()
    resolver.resolve = AsyncMock(
        side_effect=lambda entity_type, fields: {
            **fields,
            "assigned_to_name": "Ana Ortiz",
            "assigned_to_phone": "+15550101",
        }
    )
    publisher = MagicMock()
    service = TaskService(
        task_repo=task_repo,
        reminder_repo=reminder_repo,
        resolver=resolver,
        builder=EventPayloadBuilder(clock=lambda: NOW),
        publisher=publisher,
    )
    return service, task_repo, reminder_repo, resolver, publisher


async def test_create_task_publishes_created_event(mocks) -> None:
    service, task_repo, _, resolver, publisher = mocks
    task_repo.create_task = AsyncMock(return_value=_task())

    task = await service.create_task({"title": "Call supplier", "assigned_to": "usr_ana"})

    assert task.id == "t1"
    stored = task_repo.create_task.call_args.args[0]
    assert stored["assigned_to_name"] == "Ana Ortiz"
    event = publisher.publish.call_args.args[0]
    payload = event.to_payload()
    assert payload["trigger_event"] == "TASK_CREATED"
    assert payload["task_number"] == "TASK-10001"
    assert payload["assigned_to_phone"] == "+15550101"


async def test_create_task_requires_title(mocks) -> None:
    service, task_repo, _, _, publisher = mocks
    with pytest.raises(ValidationException):
        await service.create_task({"title": ""})
    task_repo.create_task.assert_not_awaited()
    publisher.publish.assert_not_called()


async def test_update_task_reports_previous_values(mocks) -> None:
    service, task_repo, reminder_repo, _, publisher = mocks
    task_repo.get_by_id = AsyncMock(return_value=_task())
    task_repo.update_task = AsyncMock(return_value=_task(status="Done", progress_percentage=100))

    await service.update_task("t1", {"status": "Done", "progress_percentage": 100})

    payload = publisher.publish.call_args.args[0].to_payload()
    assert payload["trigger_event"] == "TASK_UPDATED"
    assert payload["status"] == "Done"
    assert payload["previous"]["status"] == "To Do"
    assert payload["previous"]["progress_percentage"] == 0
    reminder_repo.list_recalculable.assert_not_awaited()


async def test_update_due_date_recalculates_unsent_reminders(mocks) -> None:
    service, task_repo, reminder_repo, _, _ = mocks
    new_due = datetime(2026, 3, 20, 17, 0, tzinfo=UTC)
    task_repo.get_by_id = AsyncMock(return_value=_task())
    task_repo.update_task = AsyncMock(return_value=_task(due_date=new_due))
    reminder_repo.list_recalculable = AsyncMock(
        return_value=[_rule("r1"), _rule("r2", offset_direction="after", offset_amount=1, offset_unit="days")]
    )

    await service.update_task("t1", {"due_date": new_due})

    reminder_repo.set_fire_time.assert_any_await("r1", datetime(2026, 3, 20, 15, 0, tzinfo=UTC))
    reminder_repo.set_fire_time.assert_any_await("r2", datetime(2026, 3, 21, 17, 0, tzinfo=UTC))


async def test_clearing_due_date_clears_fire_times(mocks) -> None:
    service, task_repo, reminder_repo, _, _ = mocks
    task_repo.get_by_id = AsyncMock(return_value=_task())
    task_repo.update_task = AsyncMock(return_value=_task(due_date=None))
    reminder_repo.list_recalculable = AsyncMock(return_value=[_rule("r1")])

    await service.update_task("t1", {"due_date": None})

    reminder_repo.set_fire_time.assert_awaited_once_with("r1", None)


async def test_update_missing_task(mocks) -> None:
    service, task_repo, _, _, publisher = mocks
    task_repo.get_by_id = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await service.update_task("nope", {"status": "Done"})
    publisher.publish.assert_not_called()


async def test_delete_task_removes_reminders_and_publishes(mocks) -> None:
    service, task_repo, reminder_repo, resolver, publisher = mocks
    task_repo.get_by_id = AsyncMock(return_value=_task())
    reminder_repo.delete_by_task = AsyncMock(return_value=2)

    await service.delete_task("t1")

    reminder_repo.delete_by_task.assert_awaited_once_with("t1")
    task_repo.delete_task.assert_awaited_once_with("t1")
    resolver.resolve.assert_not_awaited()
    payload = publisher.publish.call_args.args[0].to_payload()
    assert payload["trigger_event"] == "TASK_DELETED"
    assert payload["deleted_at"].startswith("2026-03-10T09:00:00")


async def test_recalculate_returns_count(mocks) -> None:
    service, _, reminder_repo, _, _ = mocks
    reminder_repo.list_recalculable = AsyncMock(return_value=[_rule("r1")])
    task = replace(_task(), due_date=None)
    assert await service.recalculate_reminders(task) == 1
