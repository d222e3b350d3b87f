"""Webhook subscription API tests."""

from httpx import AsyncClient

BASE = "/api/v1/webhooks"


async def _create(client: AsyncClient, **overrides) -> dict:
    body = {
        "name": "CRM sync",
        "trigger_event": "TASK_CREATED",
        "endpoint_url": "https://hooks.example.com/crm",
        **overrides,
    }
    response = await client.post(BASE, json=body)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_and_get_webhook(client: AsyncClient) -> None:
    created = await _create(client)
    assert created["http_method"] == "POST"
    assert created["is_active"] is True
    assert (created["total_calls"], created["success_count"], created["failure_count"]) == (0, 0, 0)
    assert created["last_triggered"] is None

    response = await client.get(f"{BASE}/{created['id']}")
    assert response.status_code == 200
    assert response.json()["endpoint_url"] == "https://hooks.example.com/crm"


async def test_list_filters_by_trigger_event(client: AsyncClient) -> None:
    await _create(client, name="tasks")
    await _create(client, name="leads", trigger_event="LEAD_CREATED")

    response = await client.get(BASE, params={"trigger_event": "LEAD_CREATED"})
    assert [w["name"] for w in response.json()] == ["leads"]


async def test_unknown_trigger_event_rejected(client: AsyncClient) -> None:
    response = await client.post(
        BASE,
        json={"name": "x", "trigger_event": "TASK_EXPLODED", "endpoint_url": "https://x.example.com"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_invalid_url_and_method_rejected(client: AsyncClient) -> None:
    bad_url = await client.post(
        BASE, json={"name": "x", "trigger_event": "TASK_CREATED", "endpoint_url": "ftp://x"}
    )
    bad_method = await client.post(
        BASE,
        json={
            "name": "x",
            "trigger_event": "TASK_CREATED",
            "endpoint_url": "https://x.example.com",
            "http_method": "DELETE",
        },
    )
    assert bad_url.status_code == 422
    assert bad_method.status_code == 422


async def test_patch_updates_fields(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.patch(
        f"{BASE}/{created['id']}", json={"is_active": False, "http_method": "GET"}
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert response.json()["http_method"] == "GET"


async def test_statistics_are_read_only(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.patch(f"{BASE}/{created['id']}", json={"total_calls": 99})
    assert response.status_code == 422


async def test_delete_webhook(client: AsyncClient) -> None:
    created = await _create(client)
    assert (await client.delete(f"{BASE}/{created['id']}")).status_code == 204
    missing = await client.get(f"{BASE}/{created['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "RESOURCE_NOT_FOUND"
    assert (await client.delete(f"{BASE}/{created['id']}")).status_code == 404
