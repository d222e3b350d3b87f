"""WorkflowEnqueuer against SQLite with a mocked execution notifier."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

from app.domain.entities.change_event import ChangeEvent
from app.domain.enums import OperationType
from app.infrastructure.persistence.models import WorkflowDefinition
from app.infrastructure.persistence.repositories import WorkflowExecutionRepository
from app.infrastructure.services import WorkflowEnqueuer

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def _nodes(event_name: str, actions: int = 2) -> list[dict]:
    return [{"type": "trigger", "properties": {"event_name": event_name}}] + [
        {"type": "action", "properties": {"action_type": "send_whatsapp", "step": i}}
        for i in range(actions)
    ]


async def _define(session_factory, *definitions: WorkflowDefinition) -> None:
    async with session_factory() as session, session.begin():
        session.add_all(definitions)


def _event() -> ChangeEvent:
    return ChangeEvent(
        trigger_event="TASK_CREATED",
        operation=OperationType.CREATE,
        entity_fields={"id": "t1", "title": "Call supplier", "due_date": NOW},
    )


async def test_matching_active_definitions_get_pending_executions(session_factory) -> None:
    await _define(
        session_factory,
        WorkflowDefinition(id="wf_on", name="Notify", status="active", nodes=_nodes("TASK_CREATED")),
        WorkflowDefinition(id="wf_draft", name="Draft", status="draft", nodes=_nodes("TASK_CREATED")),
        WorkflowDefinition(id="wf_other", name="Other", status="active", nodes=_nodes("LEAD_CREATED")),
        WorkflowDefinition(id="wf_empty", name="Empty", status="active", nodes=[]),
        WorkflowDefinition(id="wf_bad", name="Bad", status="active", nodes=[{"type": "action"}]),
    )
    notifier = AsyncMock()

    execution_ids = await WorkflowEnqueuer(session_factory, notifier, clock=lambda: NOW).enqueue(
        _event()
    )

    assert len(execution_ids) == 1
    notifier.notify.assert_awaited_once_with(execution_ids[0], "wf_on", "TASK_CREATED")
    async with session_factory() as session:
        (execution,) = await WorkflowExecutionRepository(session).list_by_workflow("wf_on")
    assert execution.status == "pending"
    assert execution.steps_completed == 0
    assert execution.total_steps == 2
    assert execution.started_at == NOW
    assert execution.trigger_snapshot == {
        "trigger_event": "TASK_CREATED",
        "id": "t1",
        "title": "Call supplier",
        "due_date": "2026-03-10T09:00:00Z",
    }


async def test_no_match_does_not_notify(session_factory) -> None:
    notifier = AsyncMock()
    assert await WorkflowEnqueuer(session_factory, notifier).enqueue(_event()) == []
    notifier.notify.assert_not_awaited()
