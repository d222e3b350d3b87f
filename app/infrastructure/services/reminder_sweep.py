"""Periodic reminder sweep: fires every unsent reminder whose time has come.

A rule is claimed (is_sent flipped on an UPDATE guarded by is_sent = false
and a fire time that is still due) and committed before its TASK_REMINDER
envelope is built from the claimed row and delivered, so overlapping sweeps
never fire the same reminder twice and a rule rescheduled after selection
waits for its new time. A failed delivery after a successful claim is not
retried.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.reminder import ReminderRuleResult, SweepResult
from app.application.services.denormalization_resolver import DenormalizationResolver
from app.application.services.event_payload_builder import EventPayloadBuilder
from app.domain.entities.change_event import ChangeEvent
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.directory_repo import DirectoryRepository
from app.infrastructure.persistence.repositories.reminder_repo import ReminderRuleRepository
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import ensure_utc, utc_now

if TYPE_CHECKING:
    from app.application.interfaces.services import (
        IDenormalizationResolver,
        IWebhookDispatcher,
        IWorkflowEnqueuer,
    )

logger = get_logger(__name__)

ResolverFactory = Callable[[AsyncSession], "IDenormalizationResolver"]


def _default_resolver(session: AsyncSession) -> IDenormalizationResolver:
    return DenormalizationResolver(DirectoryRepository(session))


class ReminderSweep:
    """Selects due reminders, claims each one, then emits its envelope."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        dispatcher: IWebhookDispatcher,
        *,
        builder: EventPayloadBuilder | None = None,
        enqueuer: IWorkflowEnqueuer | None = None,
        resolver_factory: ResolverFactory = _default_resolver,
        batch_size: int = 500,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._session_factory = session_factory
        self._dispatcher = dispatcher
        self._builder = builder or EventPayloadBuilder(clock=clock)
        self._enqueuer = enqueuer
        self._resolver_factory = resolver_factory
        self._batch_size = batch_size
        self._clock = clock

    @traced("reminders.sweep")
    async def run(self, now: datetime | None = None) -> SweepResult:
        """Fire reminders due at or before now (defaults to the current time)."""
        now = ensure_utc(now) if now is not None else self._clock()
        async with self._session_factory() as session:
            due = await ReminderRuleRepository(session).get_due(now, self._batch_size)

        fired: list[str] = []
        for rule in due:
            try:
                event = await self._claim_and_build(rule, now)
            except Exception:
                logger.exception("Reminder %s could not be processed", rule.id)
                continue
            if event is None:
                continue
            fired.append(rule.id)
            await self._deliver(event)

        add_span_attributes(count=len(fired), batch_size=self._batch_size)
        if due:
            logger.info("Reminder sweep: %d due, %d fired", len(due), len(fired))
        return SweepResult(processed_count=len(fired), reminder_ids=fired)

    async def _claim_and_build(
        self, rule: ReminderRuleResult, now: datetime
    ) -> ChangeEvent | None:
        async with self._session_factory() as session, session.begin():
            task = await TaskRepository(session).get_by_id(rule.task_id)
            if task is None:
                logger.warning(
                    "Reminder %s skipped: task %s no longer exists", rule.id, rule.task_id
                )
                return None
            task_fields = await self._resolver_factory(session).resolve(
                EntityType.TASK.value, task.to_fields()
            )
            claimed = await ReminderRuleRepository(session).claim(
                rule.id, self._clock(), now
            )
        if claimed is None:
            logger.info("Reminder %s already claimed or rescheduled", rule.id)
            return None
        return self._builder.build_reminder(
            claimed, task_fields, claimed.to_schedule().display()
        )

    async def _deliver(self, event: ChangeEvent) -> None:
        await self._dispatcher.dispatch(event)
        if self._enqueuer is not None:
            await self._enqueuer.enqueue(event)
