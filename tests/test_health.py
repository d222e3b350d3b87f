"""Smoke tests for health and app wiring."""

from httpx import AsyncClient

from app.main import app


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the outbox backlog."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["outbox_pending"] == 0


async def test_health_without_dispatch_runtime(client: AsyncClient) -> None:
    app.state.dispatch = None
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "outbox_pending": None}


async def test_unknown_route_returns_json_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"
