"""WebhookSubscription ORM model. Outbound HTTP endpoint per trigger event."""

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import HttpMethod
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import RecordModel, in_check


class WebhookSubscription(RecordModel, Base):
    """Webhook subscription with delivery statistics. Table: webhook_subscription.

    total_calls, success_count and failure_count are written only by the
    dispatcher's in-place increment.
    """

    __tablename__ = "webhook_subscription"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    trigger_event: Mapped[str] = mapped_column(String(100), nullable=False)
    endpoint_url: Mapped[str] = mapped_column(Text, nullable=False)
    http_method: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=HttpMethod.POST.value,
        server_default=HttpMethod.POST.value,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.true()
    )
    total_calls: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    success_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    failure_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    last_triggered: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_webhook_subscription_trigger_active", "trigger_event", "is_active"),
        CheckConstraint(
            in_check("http_method", HttpMethod.values()),
            name="webhook_subscription_method_check",
        ),
    )
