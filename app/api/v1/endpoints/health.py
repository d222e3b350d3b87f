"""Health check endpoint. No database access; used for liveness probes."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok status, plus the outbox backlog when dispatch is running."""
    runtime = getattr(request.app.state, "dispatch", None)
    if runtime is None:
        return HealthResponse()
    return HealthResponse(outbox_pending=runtime.outbox.pending)
