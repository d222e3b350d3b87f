"""In-process outbox between committed mutations and event delivery.

Mutations defer their change events on the database session; the
events reach the outbox queue only after that session's transaction
commits and are dropped if it rolls back. A small pool of worker tasks
drains the queue and runs the delivery handler (webhooks + workflow
enqueue) so request latency never includes outbound HTTP.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from app.domain.entities.change_event import ChangeEvent
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

EventHandler = Callable[[ChangeEvent], Awaitable[object]]

_PENDING_KEY = "pending_change_events"


class DispatchOutbox:
    """Bounded queue plus worker tasks running the delivery handler."""

    def __init__(
        self,
        handler: EventHandler,
        *,
        workers: int = 4,
        max_size: int = 10_000,
    ) -> None:
        self._handler = handler
        self._worker_count = workers
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=max_size)
        self._workers: list[asyncio.Task[None]] = []

    @property
    def running(self) -> bool:
        return bool(self._workers)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    async def start(self) -> None:
        if self._workers:
            return
        self._workers = [
            asyncio.create_task(self._run(), name=f"dispatch-outbox-{i}")
            for i in range(self._worker_count)
        ]
        logger.info("Dispatch outbox started with %d workers", self._worker_count)

    async def stop(self, *, drain: bool = True) -> None:
        """Stop workers; by default wait until queued events are handled."""
        if drain and self._workers:
            await self._queue.join()
        for worker in self._workers:
            worker.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        logger.info("Dispatch outbox stopped")

    def publish(self, change_event: ChangeEvent) -> bool:
        """Enqueue without waiting. Returns False when the queue is full."""
        try:
            self._queue.put_nowait(change_event)
        except asyncio.QueueFull:
            logger.error(
                "Dispatch outbox full (%d); dropped %s",
                self._queue.maxsize,
                change_event.trigger_event,
            )
            return False
        return True

    async def _run(self) -> None:
        while True:
            change_event = await self._queue.get()
            try:
                await self._handler(change_event)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception(
                    "Delivery handler failed for %s", change_event.trigger_event
                )
            finally:
                self._queue.task_done()


class SessionOutboxPublisher:
    """IEventPublisher that releases events when the session commits."""

    def __init__(self, session: AsyncSession, outbox: DispatchOutbox) -> None:
        self._session = session
        self._outbox = outbox

    def publish(self, event: ChangeEvent) -> bool:
        defer_until_commit(self._session, self._outbox, event)
        return True


class DirectOutboxPublisher:
    """IEventPublisher that enqueues immediately (no transaction to wait for)."""

    def __init__(self, outbox: DispatchOutbox) -> None:
        self._outbox = outbox

    def publish(self, event: ChangeEvent) -> bool:
        return self._outbox.publish(event)


def defer_until_commit(
    session: AsyncSession, outbox: DispatchOutbox, change_event: ChangeEvent
) -> None:
    """Hold change_event on the session until its transaction commits."""
    session.sync_session.info.setdefault(_PENDING_KEY, []).append((outbox, change_event))


@event.listens_for(Session, "after_commit")
def _release_pending(session: Session) -> None:
    for outbox, change_event in session.info.pop(_PENDING_KEY, []):
        outbox.publish(change_event)


@event.listens_for(Session, "after_rollback")
def _discard_pending(session: Session) -> None:
    dropped = session.info.pop(_PENDING_KEY, [])
    if dropped:
        logger.info("Discarded %d change events after rollback", len(dropped))
