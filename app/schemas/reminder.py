"""Reminder rule API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import OffsetDirection, OffsetUnit, ReferenceType


class ReminderCreateRequest(BaseModel):
    """Request body for adding a reminder to a task.

    custom_datetime is required for reference_type 'custom' and rejected otherwise.
    """

    model_config = ConfigDict(use_enum_values=True)

    reference_type: ReferenceType
    offset_direction: OffsetDirection = OffsetDirection.BEFORE
    offset_amount: int = Field(..., ge=0)
    offset_unit: OffsetUnit
    custom_datetime: datetime | None = None


class ReminderUpdate(BaseModel):
    """Request body for editing a reminder (partial)."""

    model_config = ConfigDict(use_enum_values=True)

    reference_type: ReferenceType | None = None
    offset_direction: OffsetDirection | None = None
    offset_amount: int | None = Field(default=None, ge=0)
    offset_unit: OffsetUnit | None = None
    custom_datetime: datetime | None = None


class ReminderResponse(BaseModel):
    """Reminder rule with its computed fire time and a readable description."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    reference_type: str
    custom_datetime: datetime | None
    offset_direction: str
    offset_amount: int
    offset_unit: str
    calculated_fire_time: datetime | None
    is_sent: bool
    sent_at: datetime | None
    display: str
    created_at: datetime
    updated_at: datetime


class SweepResponse(BaseModel):
    """Result of one reminder sweep."""

    model_config = ConfigDict(from_attributes=True)

    processed_count: int
    reminder_ids: list[str]
