"""Schemas for mutations reported by entity stores that live outside this service."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.enums import EntityType, OperationType


class MutationReportRequest(BaseModel):
    """A committed create/update/delete of a business entity.

    fields is the entity after the mutation (before it, for deletes);
    previous_fields is the entity before an update.
    """

    model_config = ConfigDict(use_enum_values=True)

    entity_type: EntityType
    operation: OperationType
    fields: dict[str, Any] = Field(..., min_length=1)
    previous_fields: dict[str, Any] | None = None

    @model_validator(mode="after")
    def previous_only_on_update(self) -> "MutationReportRequest":
        if self.previous_fields is not None and self.operation != OperationType.UPDATE:
            raise ValueError("previous_fields is only accepted for update")
        return self


class MutationReportResponse(BaseModel):
    """Whether the mutation produced an envelope, and its trigger_event."""

    accepted: bool
    trigger_event: str | None = None
