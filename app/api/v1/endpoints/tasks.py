"""Task API. Writes go through TaskService so display fields, reminders and
change events stay consistent with the stored row."""

from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.dependencies import get_task_repo, get_task_service
from app.application.use_cases.tasks import TaskService
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import TaskRepository
from app.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdate

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreateRequest,
    task_service: TaskService = Depends(get_task_service),
):
    """Create a task; emits TASK_CREATED after commit."""
    task = await task_service.create_task(body.model_dump())
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    task_repo: TaskRepository = Depends(get_task_repo),
):
    tasks = await task_repo.list_tasks(skip=skip, limit=limit)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    task_repo: TaskRepository = Depends(get_task_repo),
):
    task = await task_repo.get_by_id(task_id)
    if task is None:
        raise ResourceNotFoundException("task", task_id)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    task_service: TaskService = Depends(get_task_service),
):
    """Partial update; moving start_date/due_date reschedules unsent reminders."""
    task = await task_service.update_task(task_id, body.model_dump(exclude_unset=True))
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    task_service: TaskService = Depends(get_task_service),
):
    """Delete a task and its reminders; emits TASK_DELETED after commit."""
    await task_service.delete_task(task_id)
    return Response(status_code=204)
