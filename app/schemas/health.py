"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    outbox_pending: int | None = Field(
        default=None, description="Change events waiting for delivery"
    )
