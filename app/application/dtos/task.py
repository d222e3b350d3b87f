"""DTOs for tasks, the parent entity of reminder rules (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class TaskResult:
    """Task row including denormalized display fields."""

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

    def to_fields(self) -> dict[str, Any]:
        """Row as a plain dict (input to the resolver and event builder)."""
        return asdict(self)
