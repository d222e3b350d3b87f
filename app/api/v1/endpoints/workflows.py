"""Workflow API: thin routes delegating to the workflow definition and execution repositories."""

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import (
    get_workflow_execution_repo,
    get_workflow_repo,
    get_workflow_repo_for_write,
)
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import (
    WorkflowDefinitionRepository,
    WorkflowExecutionRepository,
)
from app.schemas.workflow import (
    WorkflowCreateRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowUpdate,
)

router = APIRouter()


@router.post("", response_model=WorkflowResponse, status_code=201)
async def create_workflow(
    body: WorkflowCreateRequest,
    workflow_repo: WorkflowDefinitionRepository = Depends(get_workflow_repo_for_write),
):
    """Create a workflow definition. Nodes are validated before saving."""
    workflow = await workflow_repo.create_definition(
        name=body.name,
        nodes=body.nodes,
        status=body.status,
        description=body.description,
    )
    return WorkflowResponse.model_validate(workflow)


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    workflow_repo: WorkflowDefinitionRepository = Depends(get_workflow_repo),
):
    workflows = await workflow_repo.list_definitions(skip=skip, limit=limit)
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.get(
    "/{workflow_id}/executions",
    response_model=list[WorkflowExecutionResponse],
)
async def get_workflow_executions(
    workflow_id: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    workflow_repo: WorkflowDefinitionRepository = Depends(get_workflow_repo),
    execution_repo: WorkflowExecutionRepository = Depends(get_workflow_execution_repo),
):
    """Execution history for a workflow, newest first."""
    if await workflow_repo.get_definition(workflow_id) is None:
        raise ResourceNotFoundException("workflow", workflow_id)
    executions = await execution_repo.list_by_workflow(
        workflow_id, skip=skip, limit=limit
    )
    return [WorkflowExecutionResponse.model_validate(e) for e in executions]


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    workflow_repo: WorkflowDefinitionRepository = Depends(get_workflow_repo),
):
    workflow = await workflow_repo.get_definition(workflow_id)
    if workflow is None:
        raise ResourceNotFoundException("workflow", workflow_id)
    return WorkflowResponse.model_validate(workflow)


@router.patch("/{workflow_id}", response_model=WorkflowResponse)
async def update_workflow(
    workflow_id: str,
    body: WorkflowUpdate,
    workflow_repo: WorkflowDefinitionRepository = Depends(get_workflow_repo_for_write),
):
    """Update name, description, status or nodes (partial)."""
    workflow = await workflow_repo.update_definition(
        workflow_id, body.model_dump(exclude_unset=True)
    )
    if workflow is None:
        raise ResourceNotFoundException("workflow", workflow_id)
    return WorkflowResponse.model_validate(workflow)
