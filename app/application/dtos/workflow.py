"""DTOs for workflow definitions and executions (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class WorkflowDefinitionResult:
    id: str
    name: str
    description: str | None
    status: str
    nodes: list[dict[str, Any]]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class WorkflowExecutionCreate:
    """Fields the enqueuer supplies for a new pending run."""

    workflow_id: str
    trigger_type: str
    trigger_snapshot: dict[str, Any]
    total_steps: int
    started_at: datetime


@dataclass(frozen=True)
class WorkflowExecutionResult:
    id: str
    workflow_id: str
    trigger_type: str
    trigger_snapshot: dict[str, Any]
    status: str
    steps_completed: int
    total_steps: int
    error_message: str | None
    started_at: datetime | None
    completed_at: datetime | None
    created_at: datetime
