"""Reminder API: rules nested under tasks, rule edits, and the sweep trigger."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.dependencies import (
    get_reminder_service,
    get_reminder_service_for_read,
    get_reminder_sweep,
)
from app.application.dtos.reminder import ReminderRuleCreate, ReminderRuleResult
from app.application.use_cases.reminders import ReminderRuleService
from app.infrastructure.services.reminder_sweep import ReminderSweep
from app.schemas.reminder import (
    ReminderCreateRequest,
    ReminderResponse,
    ReminderUpdate,
    SweepResponse,
)

router = APIRouter()
task_router = APIRouter()


def _to_response(rule: ReminderRuleResult) -> ReminderResponse:
    return ReminderResponse(**asdict(rule), display=rule.to_schedule().display())


@task_router.post(
    "/{task_id}/reminders", response_model=ReminderResponse, status_code=201
)
async def create_reminder(
    task_id: str,
    body: ReminderCreateRequest,
    reminder_service: ReminderRuleService = Depends(get_reminder_service),
):
    """Add a reminder to a task; its fire time is computed immediately."""
    rule = await reminder_service.create_rule(
        ReminderRuleCreate(task_id=task_id, **body.model_dump())
    )
    return _to_response(rule)


@task_router.get("/{task_id}/reminders", response_model=list[ReminderResponse])
async def list_reminders(
    task_id: str,
    reminder_service: ReminderRuleService = Depends(get_reminder_service_for_read),
):
    return [_to_response(r) for r in await reminder_service.list_for_task(task_id)]


@router.post("/sweep", response_model=SweepResponse)
async def run_sweep(
    sweep: ReminderSweep = Depends(get_reminder_sweep),
):
    """Fire every due reminder now (for an external scheduler)."""
    result = await sweep.run()
    return SweepResponse.model_validate(result)


@router.get("/{reminder_id}", response_model=ReminderResponse)
async def get_reminder(
    reminder_id: str,
    reminder_service: ReminderRuleService = Depends(get_reminder_service_for_read),
):
    return _to_response(await reminder_service.get_rule(reminder_id))


@router.patch("/{reminder_id}", response_model=ReminderResponse)
async def update_reminder(
    reminder_id: str,
    body: ReminderUpdate,
    reminder_service: ReminderRuleService = Depends(get_reminder_service),
):
    """Edit anchor or offset; the fire time is recomputed."""
    rule = await reminder_service.update_rule(
        reminder_id, body.model_dump(exclude_unset=True)
    )
    return _to_response(rule)


@router.delete("/{reminder_id}", status_code=204)
async def delete_reminder(
    reminder_id: str,
    reminder_service: ReminderRuleService = Depends(get_reminder_service),
):
    await reminder_service.delete_rule(reminder_id)
    return Response(status_code=204)
