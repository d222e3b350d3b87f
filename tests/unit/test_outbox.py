"""DispatchOutbox queueing and commit-bound release."""

import asyncio

import pytest

from app.domain.entities.change_event import ChangeEvent
from app.domain.enums import OperationType
from app.infrastructure.messaging.outbox import (
    DirectOutboxPublisher,
    DispatchOutbox,
    SessionOutboxPublisher,
)
from app.infrastructure.persistence.models import Contact


def _event(name: str = "CONTACT_ADDED") -> ChangeEvent:
    return ChangeEvent(trigger_event=name, operation=OperationType.CREATE, entity_fields={"id": "c1"})


async def test_stop_drains_queued_events() -> None:
    seen: list[str] = []

    async def handler(event: ChangeEvent) -> None:
        await asyncio.sleep(0)
        seen.append(event.trigger_event)

    outbox = DispatchOutbox(handler, workers=2)
    await outbox.start()
    assert outbox.running
    for name in ("A", "B", "C"):
        assert outbox.publish(_event(name))

    await outbox.stop()

    assert sorted(seen) == ["A", "B", "C"]
    assert outbox.pending == 0
    assert not outbox.running


async def test_full_queue_drops_event() -> None:
    async def handler(event: ChangeEvent) -> None:
        return None

    outbox = DispatchOutbox(handler, workers=1, max_size=1)
    assert outbox.publish(_event())
    assert not outbox.publish(_event())
    assert outbox.pending == 1


async def test_handler_failure_does_not_stop_worker() -> None:
    seen: list[str] = []

    async def handler(event: ChangeEvent) -> None:
        if event.trigger_event == "BOOM":
            raise RuntimeError("target exploded")
        seen.append(event.trigger_event)

    outbox = DispatchOutbox(handler, workers=1)
    await outbox.start()
    outbox.publish(_event("BOOM"))
    outbox.publish(_event("OK"))
    await outbox.stop()

    assert seen == ["OK"]


async def test_direct_publisher_enqueues_immediately(outbox, delivered) -> None:
    assert DirectOutboxPublisher(outbox).publish(_event()) is True
    await outbox.stop()
    assert [e.trigger_event for e in delivered] == ["CONTACT_ADDED"]


async def test_direct_publisher_reports_drop_when_full(delivered) -> None:
    async def record(event) -> None:
        delivered.append(event)

    full = DispatchOutbox(record, workers=1, max_size=1)
    publisher = DirectOutboxPublisher(full)

    assert publisher.publish(_event()) is True
    assert publisher.publish(_event()) is False
    assert full.pending == 1


async def test_session_publisher_releases_after_commit(session_factory, outbox, delivered) -> None:
    async with session_factory() as session:
        async with session.begin():
            SessionOutboxPublisher(session, outbox).publish(_event())
            session.add(Contact(id="con_1", full_name="Dee", phone=None, email=None))
            assert outbox.pending == 0
        await outbox.stop()

    assert [e.trigger_event for e in delivered] == ["CONTACT_ADDED"]


async def test_session_publisher_discards_on_rollback(session_factory, outbox, delivered) -> None:
    async with session_factory() as session:
        with pytest.raises(RuntimeError):
            async with session.begin():
                SessionOutboxPublisher(session, outbox).publish(_event())
                raise RuntimeError("mutation failed")
    await outbox.stop()

    assert delivered == []
