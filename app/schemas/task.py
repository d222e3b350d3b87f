"""Task API schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class TaskCreateRequest(BaseModel):
    """Request body for creating a task.

    Display fields (assigned_to_name, contact_phone, ...) are resolved
    from the referenced records and cannot be supplied.
    """

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    status: str = Field(default="To Do", max_length=32)
    priority: str = Field(default="Medium", max_length=32)
    category: str = Field(default="Other", max_length=64)
    assigned_to: str | None = None
    assigned_by: str | None = None
    contact_id: str | None = None
    start_date: datetime | date | None = None
    due_date: datetime | date | None = None
    completion_date: datetime | date | None = None
    estimated_hours: Decimal | None = Field(default=None, ge=0)
    actual_hours: Decimal | None = Field(default=None, ge=0)
    progress_percentage: int = Field(default=0, ge=0, le=100)
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None


class TaskUpdate(BaseModel):
    """Request body for updating a task (partial; explicit nulls clear a field)."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    status: str | None = Field(default=None, max_length=32)
    priority: str | None = Field(default=None, max_length=32)
    category: str | None = Field(default=None, max_length=64)
    assigned_to: str | None = None
    assigned_by: str | None = None
    contact_id: str | None = None
    start_date: datetime | date | None = None
    due_date: datetime | date | None = None
    completion_date: datetime | date | None = None
    estimated_hours: Decimal | None = Field(default=None, ge=0)
    actual_hours: Decimal | None = Field(default=None, ge=0)
    progress_percentage: int | None = Field(default=None, ge=0, le=100)
    tags: list[str] | None = None
    notes: str | None = None


class TaskResponse(BaseModel):
    """Task response including denormalized display fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_number: str
    title: str
    description: str | None
    status: str
    priority: str
    category: str
    assigned_to: str | None
    assigned_to_name: str | None
    assigned_by: str | None
    assigned_by_name: str | None
    contact_id: str | None
    contact_name: str | None
    contact_phone: str | None
    start_date: datetime | None
    due_date: datetime | None
    completion_date: datetime | None
    estimated_hours: Decimal | None
    actual_hours: Decimal | None
    progress_percentage: int
    tags: list[str]
    notes: str | None
    created_at: datetime
    updated_at: datetime
