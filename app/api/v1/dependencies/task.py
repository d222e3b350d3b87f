"""Task, reminder and mutation-report dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.denormalization_resolver import DenormalizationResolver
from app.application.services.event_payload_builder import EventPayloadBuilder
from app.application.use_cases.mutations import ReportMutationService
from app.application.use_cases.reminders import ReminderRuleService
from app.application.use_cases.tasks import TaskService
from app.infrastructure.messaging.outbox import (
    DirectOutboxPublisher,
    SessionOutboxPublisher,
)
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    DirectoryRepository,
    ReminderRuleRepository,
    TaskRepository,
)

from . import dispatch as dispatch_deps


async def get_task_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskRepository:
    """Task repository for read operations."""
    return TaskRepository(db)


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    publisher: Annotated[
        SessionOutboxPublisher, Depends(dispatch_deps.get_event_publisher)
    ],
) -> TaskService:
    """Task write path; resolver, repos and publisher share the request transaction."""
    return TaskService(
        task_repo=TaskRepository(db),
        reminder_repo=ReminderRuleRepository(db),
        resolver=DenormalizationResolver(DirectoryRepository(db)),
        builder=EventPayloadBuilder(),
        publisher=publisher,
    )


async def get_reminder_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ReminderRuleService:
    """Reminder rule create/update/delete (transactional)."""
    return ReminderRuleService(ReminderRuleRepository(db), TaskRepository(db))


async def get_reminder_service_for_read(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReminderRuleService:
    return ReminderRuleService(ReminderRuleRepository(db), TaskRepository(db))


async def get_report_mutation_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    publisher: Annotated[
        DirectOutboxPublisher, Depends(dispatch_deps.get_direct_publisher)
    ],
) -> ReportMutationService:
    """Mutation reports: resolve display fields (read-only), then enqueue."""
    return ReportMutationService(
        resolver=DenormalizationResolver(DirectoryRepository(db)),
        builder=EventPayloadBuilder(),
        publisher=publisher,
    )
