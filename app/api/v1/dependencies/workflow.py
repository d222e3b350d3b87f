"""Workflow and workflow-execution dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    WorkflowDefinitionRepository,
    WorkflowExecutionRepository,
)


async def get_workflow_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowDefinitionRepository:
    """Workflow repository for read operations (list, get by id)."""
    return WorkflowDefinitionRepository(db)


async def get_workflow_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> WorkflowDefinitionRepository:
    """Workflow repository for create/update (transactional)."""
    return WorkflowDefinitionRepository(db)


async def get_workflow_execution_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowExecutionRepository:
    """Workflow execution repository for read (list by workflow)."""
    return WorkflowExecutionRepository(db)
