"""Task use cases (the parent entity of reminder rules)."""

from app.application.use_cases.tasks.task_operations import TaskService

__all__ = ["TaskService"]
