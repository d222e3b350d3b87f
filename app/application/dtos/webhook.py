"""DTOs for webhook subscriptions and delivery attempts (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WebhookSubscriptionResult:
    """Read-model of one subscription including its delivery statistics."""

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


@dataclass(frozen=True)
class WebhookSubscriptionCreate:
    name: str
    trigger_event: str
    endpoint_url: str
    http_method: str = "POST"
    is_active: bool = True
    description: str | None = None


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one HTTP attempt against one subscription."""

    subscription_id: str
    success: bool
    status_code: int | None = None
    error: str | None = None
    duration_ms: float = 0.0
