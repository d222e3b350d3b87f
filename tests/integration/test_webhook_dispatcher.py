"""WebhookDispatcher against SQLite with an httpx MockTransport."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from app.application.dtos.webhook import WebhookSubscriptionCreate
from app.domain.entities.change_event import ChangeEvent
from app.domain.enums import OperationType
from app.infrastructure.persistence.repositories import WebhookSubscriptionRepository
from app.infrastructure.services import WebhookDispatcher

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def _event() -> ChangeEvent:
    return ChangeEvent(
        trigger_event="LEAD_CREATED",
        operation=OperationType.CREATE,
        entity_fields={"id": "lead_1", "status": "New", "created_at": NOW},
    )


async def _subscribe(session_factory, *subscriptions: WebhookSubscriptionCreate) -> list[str]:
    async with session_factory() as session, session.begin():
        repo = WebhookSubscriptionRepository(session)
        return [(await repo.create_subscription(s)).id for s in subscriptions]


async def _stats(session_factory, subscription_id: str) -> tuple[int, int, int]:
    async with session_factory() as session:
        hook = await WebhookSubscriptionRepository(session).get_subscription(subscription_id)
    return hook.total_calls, hook.success_count, hook.failure_count


@pytest.fixture
def requests() -> list[httpx.Request]:
    return []


def _dispatcher(session_factory, handler) -> WebhookDispatcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return WebhookDispatcher(session_factory, client, timeout_seconds=2, clock=lambda: NOW)


async def test_delivers_envelope_to_each_active_subscription(session_factory, requests) -> None:
    ok_id, get_id, off_id = await _subscribe(
        session_factory,
        WebhookSubscriptionCreate("Zap", "LEAD_CREATED", "https://hooks.example.com/zap"),
        WebhookSubscriptionCreate("Poll", "LEAD_CREATED", "https://hooks.example.com/poll", http_method="GET"),
        WebhookSubscriptionCreate("Off", "LEAD_CREATED", "https://hooks.example.com/off", is_active=False),
    )

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"ok": True})

    results = await _dispatcher(session_factory, handler).dispatch(_event())

    assert sorted(r.subscription_id for r in results) == sorted([ok_id, get_id])
    assert all(r.success and r.status_code == 200 for r in results)
    by_path = {r.url.path: r for r in requests}
    assert set(by_path) == {"/zap", "/poll"}
    assert by_path["/poll"].method == "GET"
    post = by_path["/zap"]
    assert post.method == "POST"
    assert post.headers["content-type"] == "application/json"
    body = json.loads(post.content)
    assert body == {
        "trigger_event": "LEAD_CREATED",
        "id": "lead_1",
        "status": "New",
        "created_at": "2026-03-10T09:00:00Z",
    }
    assert await _stats(session_factory, ok_id) == (1, 1, 0)
    assert await _stats(session_factory, off_id) == (0, 0, 0)


async def test_non_2xx_counts_as_failure(session_factory) -> None:
    (hook_id,) = await _subscribe(
        session_factory,
        WebhookSubscriptionCreate("Broken", "LEAD_CREATED", "https://hooks.example.com/500"),
    )

    results = await _dispatcher(session_factory, lambda request: httpx.Response(500)).dispatch(
        _event()
    )

    assert results[0].success is False
    assert results[0].status_code == 500
    assert results[0].error == "HTTP 500"
    assert await _stats(session_factory, hook_id) == (1, 0, 1)


async def test_transport_error_recorded_and_others_still_delivered(session_factory) -> None:
    down_id, up_id = await _subscribe(
        session_factory,
        WebhookSubscriptionCreate("Down", "LEAD_CREATED", "https://down.example.com/hook"),
        WebhookSubscriptionCreate("Up", "LEAD_CREATED", "https://up.example.com/hook"),
    )

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "down.example.com":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(204)

    results = {r.subscription_id: r for r in await _dispatcher(session_factory, handler).dispatch(_event())}

    assert results[down_id].success is False
    assert "connection refused" in results[down_id].error
    assert results[up_id].success is True
    assert await _stats(session_factory, down_id) == (1, 0, 1)
    assert await _stats(session_factory, up_id) == (1, 1, 0)


async def test_no_subscriptions_means_no_requests(session_factory, requests) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    assert await _dispatcher(session_factory, handler).dispatch(_event()) == []
    assert requests == []
