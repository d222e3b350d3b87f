"""Webhook dispatcher: one HTTP attempt per active subscription (implements IWebhookDispatcher).

Deliveries for one envelope run concurrently (bounded by a semaphore).
Each attempt is followed by an atomic statistics update on its own
short transaction. Nothing here is retried and nothing propagates to
the caller: failures become failure_count increments and log lines.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.webhook import DeliveryResult, WebhookSubscriptionResult
from app.domain.entities.change_event import ChangeEvent
from app.infrastructure.persistence.repositories.webhook_repo import (
    WebhookSubscriptionRepository,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class WebhookDispatcher:
    """Fans an envelope out to every active subscription for its trigger_event."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        http_client: httpx.AsyncClient,
        *,
        timeout_seconds: float = 10.0,
        max_concurrency: int = 20,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_factory = session_factory
        self._http = http_client
        self._timeout = httpx.Timeout(timeout_seconds)
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._clock = clock

    @traced("webhooks.dispatch")
    async def dispatch(self, event: ChangeEvent) -> list[DeliveryResult]:
        """Deliver the envelope; return one result per subscription attempted."""
        try:
            async with self._session_factory() as session:
                subscriptions = await WebhookSubscriptionRepository(
                    session
                ).get_active_by_trigger(event.trigger_event)
        except Exception:
            logger.exception(
                "Could not load webhook subscriptions for %s", event.trigger_event
            )
            return []
        if not subscriptions:
            return []

        payload = event.to_payload()
        results = await asyncio.gather(
            *(self._deliver(subscription, payload) for subscription in subscriptions)
        )
        succeeded = sum(1 for r in results if r.success)
        add_span_attributes(
            trigger_event=event.trigger_event,
            deliveries=len(results),
            deliveries_failed=len(results) - succeeded,
        )
        logger.info(
            "Dispatched %s to %d webhooks (%d ok, %d failed)",
            event.trigger_event,
            len(results),
            succeeded,
            len(results) - succeeded,
        )
        return list(results)

    async def _deliver(
        self, subscription: WebhookSubscriptionResult, payload: dict[str, Any]
    ) -> DeliveryResult:
        async with self._semaphore:
            result = await self._send(subscription, payload)
        await self._record(subscription.id, result.success)
        return result

    async def _send(
        self, subscription: WebhookSubscriptionResult, payload: dict[str, Any]
    ) -> DeliveryResult:
        started = time.perf_counter()

        def elapsed_ms() -> float:
            return (time.perf_counter() - started) * 1000

        try:
            response = await self._http.request(
                subscription.http_method,
                subscription.endpoint_url,
                json=payload,
                headers=JSON_HEADERS,
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = str(e) or type(e).__name__
            logger.warning(
                "Webhook %s (%s) failed for %s: %s",
                subscription.name,
                subscription.id,
                payload.get("trigger_event"),
                error,
            )
            return DeliveryResult(
                subscription_id=subscription.id,
                success=False,
                error=error,
                duration_ms=elapsed_ms(),
            )
        except Exception as e:
            logger.exception(
                "Webhook %s (%s) raised unexpectedly", subscription.name, subscription.id
            )
            return DeliveryResult(
                subscription_id=subscription.id,
                success=False,
                error=str(e) or type(e).__name__,
                duration_ms=elapsed_ms(),
            )

        if not response.is_success:
            logger.warning(
                "Webhook %s (%s) returned HTTP %d for %s",
                subscription.name,
                subscription.id,
                response.status_code,
                payload.get("trigger_event"),
            )
            return DeliveryResult(
                subscription_id=subscription.id,
                success=False,
                status_code=response.status_code,
                error=f"HTTP {response.status_code}",
                duration_ms=elapsed_ms(),
            )
        return DeliveryResult(
            subscription_id=subscription.id,
            success=True,
            status_code=response.status_code,
            duration_ms=elapsed_ms(),
        )

    async def _record(self, subscription_id: str, success: bool) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                await WebhookSubscriptionRepository(session).record_attempt(
                    subscription_id, success, self._clock()
                )
        except Exception:
            logger.exception(
                "Failed to record delivery statistics for webhook %s", subscription_id
            )
