"""WorkflowDefinition and WorkflowExecution repositories."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import (
    WorkflowDefinitionResult,
    WorkflowExecutionCreate,
    WorkflowExecutionResult,
)
from app.domain.entities.workflow import WorkflowDefinitionEntity, parse_nodes
from app.domain.enums import WorkflowStatus
from app.domain.exceptions import WorkflowDefinitionException
from app.infrastructure.persistence.models.workflow import (
    WorkflowDefinition,
    WorkflowExecution,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.enums import WorkflowExecutionStatus
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc

logger = get_logger(__name__)

_EDITABLE = ("name", "description", "status", "nodes")


def _definition_to_result(w: WorkflowDefinition) -> WorkflowDefinitionResult:
    return WorkflowDefinitionResult(
        id=w.id,
        name=w.name,
        description=w.description,
        status=w.status,
        nodes=list(w.nodes or []),
        created_at=ensure_utc(w.created_at),
        updated_at=ensure_utc(w.updated_at),
    )


def _execution_to_result(e: WorkflowExecution) -> WorkflowExecutionResult:
    return WorkflowExecutionResult(
        id=e.id,
        workflow_id=e.workflow_id,
        trigger_type=e.trigger_type,
        trigger_snapshot=e.trigger_snapshot,
        status=e.status,
        steps_completed=e.steps_completed,
        total_steps=e.total_steps,
        error_message=e.error_message,
        started_at=ensure_utc(e.started_at),
        completed_at=ensure_utc(e.completed_at),
        created_at=ensure_utc(e.created_at),
    )


class WorkflowDefinitionRepository(BaseRepository[WorkflowDefinition]):
    """Workflow definition repository. Implements IWorkflowDefinitionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowDefinition)

    async def get_active_definitions(self) -> list[WorkflowDefinitionEntity]:
        """Load active definitions and parse their nodes.

        Definitions with no nodes are skipped; a definition whose nodes do
        not parse is logged and skipped so it cannot block the others.
        """
        result = await self.db.execute(
            select(WorkflowDefinition)
            .where(WorkflowDefinition.status == WorkflowStatus.ACTIVE.value)
            .order_by(WorkflowDefinition.created_at.asc())
        )
        definitions: list[WorkflowDefinitionEntity] = []
        for row in result.scalars().all():
            if not row.nodes:
                continue
            try:
                nodes = parse_nodes(row.nodes)
            except WorkflowDefinitionException as e:
                logger.warning("Skipping workflow %s: %s", row.id, e.message)
                continue
            definitions.append(
                WorkflowDefinitionEntity(
                    id=row.id,
                    name=row.name,
                    status=WorkflowStatus(row.status),
                    nodes=nodes,
                )
            )
        return definitions

    async def create_definition(
        self,
        name: str,
        nodes: list[dict[str, Any]],
        status: str,
        description: str | None = None,
    ) -> WorkflowDefinitionResult:
        """Create a definition; nodes must parse."""
        parse_nodes(nodes)
        definition = WorkflowDefinition(
            name=name, description=description, status=status, nodes=nodes
        )
        return _definition_to_result(await self.create(definition))

    async def get_definition(self, workflow_id: str) -> WorkflowDefinitionResult | None:
        definition = await self.get_by_id(workflow_id)
        return _definition_to_result(definition) if definition else None

    async def list_definitions(
        self, skip: int = 0, limit: int = 100
    ) -> list[WorkflowDefinitionResult]:
        return [_definition_to_result(w) for w in await self.get_all(skip, limit)]

    async def update_definition(
        self, workflow_id: str, fields: dict[str, Any]
    ) -> WorkflowDefinitionResult | None:
        definition = await self.get_by_id(workflow_id)
        if definition is None:
            return None
        fields = self._writable(fields, _EDITABLE)
        if "nodes" in fields:
            parse_nodes(fields["nodes"])
        return _definition_to_result(await self.update(definition, fields))


class WorkflowExecutionRepository(BaseRepository[WorkflowExecution]):
    """Workflow execution repository. Implements IWorkflowExecutionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowExecution)

    async def create_execution(
        self, data: WorkflowExecutionCreate
    ) -> WorkflowExecutionResult:
        execution = WorkflowExecution(
            workflow_id=data.workflow_id,
            trigger_type=data.trigger_type,
            trigger_snapshot=data.trigger_snapshot,
            status=WorkflowExecutionStatus.PENDING.value,
            steps_completed=0,
            total_steps=data.total_steps,
            started_at=data.started_at,
        )
        return _execution_to_result(await self.create(execution))

    async def list_by_workflow(
        self, workflow_id: str, skip: int = 0, limit: int = 100
    ) -> list[WorkflowExecutionResult]:
        result = await self.db.execute(
            select(WorkflowExecution)
            .where(WorkflowExecution.workflow_id == workflow_id)
            .order_by(WorkflowExecution.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_execution_to_result(e) for e in result.scalars().all()]
