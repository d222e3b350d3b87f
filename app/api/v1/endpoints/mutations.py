"""Mutation report API for entity stores that live outside this service."""

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_report_mutation_service
from app.application.use_cases.mutations import ReportMutationService
from app.schemas.mutation import MutationReportRequest, MutationReportResponse

router = APIRouter()


@router.post("", response_model=MutationReportResponse, status_code=202)
async def report_mutation(
    body: MutationReportRequest,
    mutation_service: ReportMutationService = Depends(get_report_mutation_service),
):
    """Queue the change event for a committed mutation.

    accepted is false when the entity emits nothing for this mutation
    (e.g. an attendance update that is not a check-out) or when the
    outbox is full and the event was dropped.
    """
    event = await mutation_service.report(
        body.entity_type, body.operation, body.fields, body.previous_fields
    )
    if event is None:
        return MutationReportResponse(accepted=False)
    return MutationReportResponse(accepted=True, trigger_event=event.trigger_event)
