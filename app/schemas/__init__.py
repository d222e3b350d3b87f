"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.mutation import MutationReportRequest, MutationReportResponse
from app.schemas.reminder import (
    ReminderCreateRequest,
    ReminderResponse,
    ReminderUpdate,
    SweepResponse,
)
from app.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdate
from app.schemas.webhook import WebhookCreateRequest, WebhookResponse, WebhookUpdate
from app.schemas.workflow import (
    WorkflowCreateRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowUpdate,
)

__all__ = [
    "HealthResponse",
    "MutationReportRequest",
    "MutationReportResponse",
    "ReminderCreateRequest",
    "ReminderResponse",
    "ReminderUpdate",
    "SweepResponse",
    "TaskCreateRequest",
    "TaskResponse",
    "TaskUpdate",
    "WebhookCreateRequest",
    "WebhookResponse",
    "WebhookUpdate",
    "WorkflowCreateRequest",
    "WorkflowExecutionResponse",
    "WorkflowResponse",
    "WorkflowUpdate",
]
