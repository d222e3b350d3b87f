"""Workflow API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import WorkflowStatus


class WorkflowCreateRequest(BaseModel):
    """Request body for creating a workflow definition.

    nodes[0] must be a trigger node and every later node an action node.
    """

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255)
    nodes: list[dict[str, Any]] = Field(..., min_length=1)
    status: WorkflowStatus = WorkflowStatus.DRAFT
    description: str | None = None


class WorkflowUpdate(BaseModel):
    """Request body for updating a workflow (partial)."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: WorkflowStatus | None = None
    nodes: list[dict[str, Any]] | None = Field(default=None, min_length=1)


class WorkflowResponse(BaseModel):
    """Workflow definition response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    status: str
    nodes: list[dict[str, Any]]
    created_at: datetime
    updated_at: datetime


class WorkflowExecutionResponse(BaseModel):
    """Workflow execution response."""

    model_config = ConfigDict(from_attributes=True)

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
