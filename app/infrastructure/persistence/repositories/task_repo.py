"""Task repository (parent entity of reminder rules)."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskResult
from app.infrastructure.persistence.models.task import TASK_NUMBER_SEQ, Task
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import as_utc_datetime, ensure_utc
from app.shared.utils.generators import TASK_NUMBER_START, format_task_number

# Columns callers may set; id, task_number and timestamps are managed here.
_WRITABLE = (
    "title",
    "description",
    "status",
    "priority",
    "category",
    "assigned_to",
    "assigned_to_name",
    "assigned_by",
    "assigned_by_name",
    "contact_id",
    "contact_name",
    "contact_phone",
    "start_date",
    "due_date",
    "completion_date",
    "estimated_hours",
    "actual_hours",
    "progress_percentage",
    "tags",
    "notes",
)
_DATE_FIELDS = ("start_date", "due_date", "completion_date")


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        task_number=t.task_number,
        title=t.title,
        description=t.description,
        status=t.status,
        priority=t.priority,
        category=t.category,
        assigned_to=t.assigned_to,
        assigned_to_name=t.assigned_to_name,
        assigned_by=t.assigned_by,
        assigned_by_name=t.assigned_by_name,
        contact_id=t.contact_id,
        contact_name=t.contact_name,
        contact_phone=t.contact_phone,
        start_date=ensure_utc(t.start_date),
        due_date=ensure_utc(t.due_date),
        completion_date=ensure_utc(t.completion_date),
        estimated_hours=Decimal(t.estimated_hours) if t.estimated_hours is not None else None,
        actual_hours=Decimal(t.actual_hours) if t.actual_hours is not None else None,
        progress_percentage=t.progress_percentage,
        tags=list(t.tags or []),
        notes=t.notes,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    def _prepare(self, fields: dict[str, Any]) -> dict[str, Any]:
        values = self._writable(fields, _WRITABLE)
        for key in _DATE_FIELDS:
            if key in values:
                values[key] = as_utc_datetime(values[key])
        if values.get("tags") is None and "tags" in values:
            values["tags"] = []
        return values

    async def _next_task_number(self) -> str:
        """Next TASK-xxxxx number (database sequence where supported)."""
        if self.db.bind.dialect.supports_sequences:
            return format_task_number(await self.db.scalar(TASK_NUMBER_SEQ.next_value()))
        count = await self.db.scalar(select(func.count(Task.id)))
        return format_task_number(TASK_NUMBER_START + (count or 0))

    async def create_task(self, fields: dict[str, Any]) -> TaskResult:
        """Create a task and return the result DTO."""
        task = Task(task_number=await self._next_task_number(), **self._prepare(fields))
        return _to_result(await self.create(task))

    async def get_by_id(self, task_id: str) -> TaskResult | None:  # type: ignore[override]
        task = await self.db.get(Task, task_id)
        return _to_result(task) if task else None

    async def list_tasks(self, skip: int = 0, limit: int = 100) -> list[TaskResult]:
        return [_to_result(t) for t in await self.get_all(skip, limit)]

    async def update_task(self, task_id: str, fields: dict[str, Any]) -> TaskResult | None:
        task = await self.db.get(Task, task_id)
        if task is None:
            return None
        return _to_result(await self.update(task, self._prepare(fields)))

    async def delete_task(self, task_id: str) -> bool:
        task = await self.db.get(Task, task_id)
        if task is None:
            return False
        await self.delete(task)
        return True
