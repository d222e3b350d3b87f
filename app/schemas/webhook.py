"""Webhook subscription API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.application.services.entity_adapters import known_event_names
from app.domain.enums import HttpMethod

_URL_PATTERN = r"^https?://\S+$"


def _check_trigger_event(value: str | None) -> str | None:
    if value is not None and value not in known_event_names():
        raise ValueError(f"Unknown trigger event: {value}")
    return value


class WebhookCreateRequest(BaseModel):
    """Request body for creating a webhook subscription."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255)
    trigger_event: str = Field(..., min_length=1, max_length=128)
    endpoint_url: str = Field(..., max_length=2048, pattern=_URL_PATTERN)
    http_method: HttpMethod = HttpMethod.POST
    is_active: bool = True
    description: str | None = None

    _trigger = field_validator("trigger_event")(_check_trigger_event)


class WebhookUpdate(BaseModel):
    """Partial update. Delivery statistics are not accepted here."""

    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    trigger_event: str | None = Field(default=None, min_length=1, max_length=128)
    endpoint_url: str | None = Field(default=None, max_length=2048, pattern=_URL_PATTERN)
    http_method: HttpMethod | None = None
    is_active: bool | None = None

    _trigger = field_validator("trigger_event")(_check_trigger_event)


class WebhookResponse(BaseModel):
    """Webhook subscription with delivery statistics."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    trigger_event: str
    endpoint_url: str
    http_method: str
    is_active: bool
    total_calls: int
    success_count: int
    failure_count: int
    last_triggered: datetime | None
    created_at: datetime
    updated_at: datetime
