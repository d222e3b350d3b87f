"""ReminderSweep end to end on SQLite: claim, envelope and at-most-once firing."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.reminder import ReminderRuleCreate
from app.infrastructure.persistence.repositories import (
    ReminderRuleRepository,
    TaskRepository,
)
from app.infrastructure.services import ReminderSweep

UTC = timezone.utc
NOW = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)
DUE = datetime(2026, 3, 10, 10, 0, tzinfo=UTC)


@pytest.fixture
def dispatcher() -> AsyncMock:
    dispatcher = AsyncMock()
    dispatcher.dispatch = AsyncMock(return_value=[])
    return dispatcher


async def _task_with_rules(session_factory, directory, *rules: tuple[int, str]) -> tuple[str, list[str]]:
    """Task due at DUE assigned by Ben to Ana, with (amount, unit) before-due rules."""
    async with session_factory() as session, session.begin():
        task = await TaskRepository(session).create_task(
            {
                "title": "Renew contract",
                "assigned_to": directory.assignee,
                "assigned_to_name": "Ana Ortiz",
                "assigned_by": directory.assigner,
                "contact_id": directory.contact,
                "due_date": DUE,
            }
        )
        repo = ReminderRuleRepository(session)
        rule_ids = []
        for amount, unit in rules:
            fire_time = DUE - timedelta(**{unit: amount})
            rule = await repo.create_rule(
                ReminderRuleCreate(task.id, "due", "before", amount, unit), fire_time
            )
            rule_ids.append(rule.id)
    return task.id, rule_ids


def _sweep(session_factory, dispatcher, **kwargs) -> ReminderSweep:
    return ReminderSweep(session_factory, dispatcher, clock=lambda: NOW, **kwargs)


async def test_due_reminder_fires_once(session_factory, directory, dispatcher) -> None:
    task_id, (due_now, later) = await _task_with_rules(
        session_factory, directory, (1, "hours"), (30, "minutes")
    )
    sweep = _sweep(session_factory, dispatcher)

    result = await sweep.run()

    assert result.processed_count == 1
    assert result.reminder_ids == [due_now]
    (event,) = [call.args[0] for call in dispatcher.dispatch.await_args_list]
    payload = event.to_payload()
    assert payload["trigger_event"] == "TASK_REMINDER"
    assert payload["reminder_id"] == due_now
    assert payload["task_id"] == task_id
    assert payload["task_readable_id"] == "TASK-10001"
    assert payload["task_title"] == "Renew contract"
    assert payload["assigned_to_name"] == "Ana Ortiz"
    assert payload["assigned_to_phone"] == "+15550101"
    assert payload["assigned_by_name"] == "Ben Cole"
    assert payload["assigned_by_phone"] == "+15550102"
    assert payload["contact_phone"] == "+15550199"
    assert payload["reminder_display"] == "1 hours before Due Date"
    assert payload["reminder_scheduled_time"] == "2026-03-10T09:00:00Z"

    again = await sweep.run()
    assert again.processed_count == 0
    assert dispatcher.dispatch.await_count == 1

    async with session_factory() as session:
        rules = {r.id: r for r in await ReminderRuleRepository(session).list_by_task(task_id)}
    assert rules[due_now].is_sent is True
    assert rules[due_now].sent_at == NOW
    assert rules[later].is_sent is False


async def test_explicit_now_fires_in_fire_time_order(session_factory, directory, dispatcher) -> None:
    _, (two_hours, one_hour) = await _task_with_rules(
        session_factory, directory, (2, "hours"), (1, "hours")
    )

    result = await _sweep(session_factory, dispatcher).run(DUE)

    assert result.reminder_ids == [two_hours, one_hour]


async def test_batch_size_bounds_one_run(session_factory, directory, dispatcher) -> None:
    await _task_with_rules(session_factory, directory, (3, "hours"), (2, "hours"))

    sweep = _sweep(session_factory, dispatcher, batch_size=1)

    assert (await sweep.run()).processed_count == 1
    assert (await sweep.run()).processed_count == 1
    assert (await sweep.run()).processed_count == 0


async def test_orphaned_reminder_skipped_and_left_unsent(session_factory, directory, dispatcher) -> None:
    task_id, (rule_id,) = await _task_with_rules(session_factory, directory, (1, "hours"))
    async with session_factory() as session, session.begin():
        await TaskRepository(session).delete_task(task_id)

    result = await _sweep(session_factory, dispatcher).run()

    assert result.processed_count == 0
    dispatcher.dispatch.assert_not_awaited()
    async with session_factory() as session:
        assert (await ReminderRuleRepository(session).get_rule(rule_id)).is_sent is False


async def test_fired_reminder_also_enqueues_workflows(session_factory, directory, dispatcher) -> None:
    _, (rule_id,) = await _task_with_rules(session_factory, directory, (1, "hours"))
    enqueuer = AsyncMock()
    enqueuer.enqueue = AsyncMock(return_value=[])

    result = await _sweep(session_factory, dispatcher, enqueuer=enqueuer).run()

    assert result.reminder_ids == [rule_id]
    enqueuer.enqueue.assert_awaited_once()
    async with session_factory() as session:
        assert (await ReminderRuleRepository(session).get_rule(rule_id)).is_sent is True


async def test_rule_rescheduled_after_selection_waits_for_new_time(
    session_factory, directory, dispatcher
) -> None:
    _, (first, moved) = await _task_with_rules(
        session_factory, directory, (2, "hours"), (1, "hours")
    )
    new_time = DUE + timedelta(days=7)

    async def move_due_date(event):
        # The task's due date moves while the sweep is still working through its batch.
        async with session_factory() as session, session.begin():
            await ReminderRuleRepository(session).set_fire_time(moved, new_time)
        return []

    dispatcher.dispatch = AsyncMock(side_effect=move_due_date)

    result = await _sweep(session_factory, dispatcher).run()

    assert result.reminder_ids == [first]
    (event,) = [call.args[0] for call in dispatcher.dispatch.await_args_list]
    assert event.to_payload()["reminder_scheduled_time"] == "2026-03-10T08:00:00Z"
    async with session_factory() as session:
        stored = await ReminderRuleRepository(session).get_rule(moved)
    assert stored.is_sent is False
    assert stored.calculated_fire_time == new_time
