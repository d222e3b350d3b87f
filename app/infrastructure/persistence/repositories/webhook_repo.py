"""WebhookSubscription repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.webhook import (
    WebhookSubscriptionCreate,
    WebhookSubscriptionResult,
)
from app.infrastructure.persistence.models.webhook import WebhookSubscription
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc

# Statistics columns are not editable.
_EDITABLE = ("name", "description", "trigger_event", "endpoint_url", "http_method", "is_active")


def _to_result(w: WebhookSubscription) -> WebhookSubscriptionResult:
    """Map WebhookSubscription ORM to WebhookSubscriptionResult DTO."""
    return WebhookSubscriptionResult(
        id=w.id,
        name=w.name,
        description=w.description,
        trigger_event=w.trigger_event,
        endpoint_url=w.endpoint_url,
        http_method=w.http_method,
        is_active=w.is_active,
        total_calls=w.total_calls,
        success_count=w.success_count,
        failure_count=w.failure_count,
        last_triggered=ensure_utc(w.last_triggered),
        created_at=ensure_utc(w.created_at),
        updated_at=ensure_utc(w.updated_at),
    )


class WebhookSubscriptionRepository(BaseRepository[WebhookSubscription]):
    """Webhook subscription repository. Implements IWebhookSubscriptionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WebhookSubscription)

    async def get_active_by_trigger(
        self, trigger_event: str
    ) -> list[WebhookSubscriptionResult]:
        result = await self.db.execute(
            select(WebhookSubscription)
            .where(
                WebhookSubscription.trigger_event == trigger_event,
                WebhookSubscription.is_active.is_(True),
            )
            .order_by(WebhookSubscription.created_at.asc())
        )
        return [_to_result(w) for w in result.scalars().all()]

    async def record_attempt(
        self, subscription_id: str, success: bool, attempted_at: datetime
    ) -> None:
        """Increment statistics in place (no read-modify-write).

        total_calls and exactly one of success_count / failure_count go up
        by one in the same statement, so concurrent attempts never lose
        an increment.
        """
        counter = (
            WebhookSubscription.success_count
            if success
            else WebhookSubscription.failure_count
        )
        await self.db.execute(
            update(WebhookSubscription)
            .where(WebhookSubscription.id == subscription_id)
            .values(
                {
                    WebhookSubscription.total_calls: WebhookSubscription.total_calls + 1,
                    counter: counter + 1,
                    WebhookSubscription.last_triggered: attempted_at,
                }
            )
            .execution_options(synchronize_session=False)
        )

    async def create_subscription(
        self, data: WebhookSubscriptionCreate
    ) -> WebhookSubscriptionResult:
        subscription = WebhookSubscription(
            name=data.name,
            description=data.description,
            trigger_event=data.trigger_event,
            endpoint_url=data.endpoint_url,
            http_method=data.http_method,
            is_active=data.is_active,
            total_calls=0,
            success_count=0,
            failure_count=0,
        )
        return _to_result(await self.create(subscription))

    async def get_subscription(
        self, subscription_id: str
    ) -> WebhookSubscriptionResult | None:
        subscription = await self.get_by_id(subscription_id)
        return _to_result(subscription) if subscription else None

    async def list_subscriptions(
        self, trigger_event: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[WebhookSubscriptionResult]:
        q = select(WebhookSubscription)
        if trigger_event:
            q = q.where(WebhookSubscription.trigger_event == trigger_event)
        q = q.order_by(WebhookSubscription.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_to_result(w) for w in result.scalars().all()]

    async def update_subscription(
        self, subscription_id: str, fields: dict[str, Any]
    ) -> WebhookSubscriptionResult | None:
        subscription = await self.get_by_id(subscription_id)
        if subscription is None:
            return None
        updated = await self.update(subscription, self._writable(fields, _EDITABLE))
        return _to_result(updated)

    async def delete_subscription(self, subscription_id: str) -> bool:
        subscription = await self.get_by_id(subscription_id)
        if subscription is None:
            return False
        await self.delete(subscription)
        return True
