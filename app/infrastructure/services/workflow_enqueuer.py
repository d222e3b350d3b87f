"""Workflow execution enqueuer (implements IWorkflowEnqueuer).

For each active definition whose trigger node matches the envelope, a
pending execution row is written in its own transaction and the runner
is notified after that commit. Action nodes are never executed here.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.workflow import WorkflowExecutionCreate
from app.domain.entities.change_event import ChangeEvent
from app.domain.entities.workflow import WorkflowDefinitionEntity
from app.infrastructure.persistence.repositories.workflow_repo import (
    WorkflowDefinitionRepository,
    WorkflowExecutionRepository,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.interfaces.services import IExecutionNotifier

logger = get_logger(__name__)


class WorkflowEnqueuer:
    """Creates pending executions for definitions triggered by an event."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        notifier: IExecutionNotifier,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_factory = session_factory
        self._notifier = notifier
        self._clock = clock

    @traced("workflows.enqueue")
    async def enqueue(self, event: ChangeEvent) -> list[str]:
        """Return ids of executions created (one per matching definition)."""
        try:
            async with self._session_factory() as session:
                definitions = await WorkflowDefinitionRepository(
                    session
                ).get_active_definitions()
        except Exception:
            logger.exception("Could not load workflow definitions for %s", event.trigger_event)
            return []

        matching = [d for d in definitions if d.can_trigger_on(event.trigger_event)]
        if not matching:
            return []

        snapshot = event.to_payload()
        execution_ids: list[str] = []
        for definition in matching:
            execution_id = await self._enqueue_one(definition, event.trigger_event, snapshot)
            if execution_id is not None:
                execution_ids.append(execution_id)
        add_span_attributes(
            trigger_event=event.trigger_event, executions=len(execution_ids)
        )
        logger.info(
            "Enqueued %d workflow executions for %s", len(execution_ids), event.trigger_event
        )
        return execution_ids

    async def _enqueue_one(
        self,
        definition: WorkflowDefinitionEntity,
        trigger_type: str,
        snapshot: dict[str, Any],
    ) -> str | None:
        try:
            async with self._session_factory() as session, session.begin():
                execution = await WorkflowExecutionRepository(session).create_execution(
                    WorkflowExecutionCreate(
                        workflow_id=definition.id,
                        trigger_type=trigger_type,
                        trigger_snapshot=snapshot,
                        total_steps=definition.total_steps,
                        started_at=self._clock(),
                    )
                )
        except Exception:
            logger.exception(
                "Failed to enqueue workflow %s (%s) for %s",
                definition.name,
                definition.id,
                trigger_type,
            )
            return None
        await self._notifier.notify(execution.id, definition.id, trigger_type)
        return execution.id
