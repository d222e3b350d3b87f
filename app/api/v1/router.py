"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    health,
    mutations,
    reminders,
    tasks,
    webhooks,
    workflows,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["webhooks"])
api_router.include_router(workflows.router, prefix="/workflows", tags=["workflows"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(reminders.task_router, prefix="/tasks", tags=["reminders"])
api_router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
api_router.include_router(mutations.router, prefix="/mutations", tags=["mutations"])
