"""ReportMutationService unit tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.services.event_payload_builder import EventPayloadBuilder
from app.application.use_cases.mutations import ReportMutationService
from app.domain.exceptions import ValidationException

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.resolve = AsyncMock(side_effect=lambda entity_type, fields: {**fields, "owner_name": "Ana Ortiz"})
    return resolver


@pytest.fixture
def publisher() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(resolver, publisher) -> ReportMutationService:
    return ReportMutationService(resolver, EventPayloadBuilder(clock=lambda: NOW), publisher)


async def test_lead_update_published_with_previous(service, publisher) -> None:
    event = await service.report(
        "lead",
        "update",
        {"id": "lead_1", "status": "Qualified", "owner": "usr_ana"},
        {"status": "New"},
    )

    assert event is not None
    publisher.publish.assert_called_once_with(event)
    payload = event.to_payload()
    assert payload["trigger_event"] == "LEAD_UPDATED"
    assert payload["owner_name"] == "Ana Ortiz"
    assert payload["previous"]["status"] == "New"
    assert payload["previous"]["lead_score"] is None


async def test_delete_skips_resolution(service, resolver, publisher) -> None:
    event = await service.report("ticket", "delete", {"id": "tkt_1", "status": "Open"})

    resolver.resolve.assert_not_awaited()
    assert event.to_payload()["trigger_event"] == "TICKET_DELETED"
    assert event.deleted_at == NOW


async def test_attendance_update_without_checkout_emits_nothing(service, publisher) -> None:
    event = await service.report(
        "attendance",
        "update",
        {"id": "att_1", "check_in": "2026-03-10T08:00:00Z", "check_out": None},
        {"check_out": None},
    )

    assert event is None
    publisher.publish.assert_not_called()


async def test_attendance_checkout(service) -> None:
    event = await service.report(
        "attendance",
        "update",
        {"id": "att_1", "check_out": "2026-03-10T17:00:00Z"},
        {"check_out": None},
    )
    assert event.trigger_event == "ATTENDANCE_CHECKOUT"


async def test_unknown_entity_rejected_before_resolution(service, resolver) -> None:
    with pytest.raises(ValidationException):
        await service.report("spaceship", "create", {"id": "x"})
    resolver.resolve.assert_not_awaited()


async def test_unknown_operation_rejected(service) -> None:
    with pytest.raises(ValueError):
        await service.report("lead", "upsert", {"id": "x"})


async def test_event_dropped_by_publisher_reported_as_none(service, publisher) -> None:
    publisher.publish.return_value = False

    assert await service.report("invoice", "create", {"id": "inv_1", "status": "Draft"}) is None
    publisher.publish.assert_called_once()
