"""Guarantees that need PostgreSQL: row locking, sequences and aborted-transaction recovery."""

import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy import text

from app.application.dtos.reminder import ReminderRuleCreate
from app.application.dtos.webhook import WebhookSubscriptionCreate
from app.application.services.denormalization_resolver import DenormalizationResolver
from app.infrastructure.persistence.repositories import (
    DirectoryRepository,
    ReminderRuleRepository,
    TaskRepository,
    WebhookSubscriptionRepository,
)

pytestmark = pytest.mark.requires_db

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


async def test_concurrent_claims_fire_once(pg_session_factory) -> None:
    async with pg_session_factory() as session, session.begin():
        task = await TaskRepository(session).create_task({"title": "Race"})
        rule = await ReminderRuleRepository(session).create_rule(
            ReminderRuleCreate(task.id, "due", "before", 0, "minutes"), NOW
        )

    async def claim() -> bool:
        async with pg_session_factory() as session, session.begin():
            return await ReminderRuleRepository(session).claim(rule.id, NOW, NOW) is not None

    outcomes = await asyncio.gather(*(claim() for _ in range(8)))
    assert outcomes.count(True) == 1


async def test_concurrent_attempts_lose_no_increment(pg_session_factory) -> None:
    async with pg_session_factory() as session, session.begin():
        hook = await WebhookSubscriptionRepository(session).create_subscription(
            WebhookSubscriptionCreate("Hot", "TASK_CREATED", "https://hot.example.com")
        )

    async def attempt(success: bool) -> None:
        async with pg_session_factory() as session, session.begin():
            await WebhookSubscriptionRepository(session).record_attempt(hook.id, success, NOW)

    await asyncio.gather(*(attempt(i % 3 != 0) for i in range(30)))

    async with pg_session_factory() as session:
        stored = await WebhookSubscriptionRepository(session).get_subscription(hook.id)
    assert stored.total_calls == 30
    assert stored.failure_count == 10
    assert stored.success_count == 20


async def test_task_numbers_from_sequence(pg_session_factory) -> None:
    async with pg_session_factory() as session, session.begin():
        repo = TaskRepository(session)
        numbers = [(await repo.create_task({"title": f"T{i}"})).task_number for i in range(3)]
    assert numbers == ["TASK-10001", "TASK-10002", "TASK-10003"]


async def test_failed_lookup_leaves_transaction_usable(pg_session_factory) -> None:
    async with pg_session_factory() as session, session.begin():
        await session.execute(text("DROP TABLE admin_user CASCADE"))

    async with pg_session_factory() as session, session.begin():
        fields = await DenormalizationResolver(DirectoryRepository(session)).resolve(
            "task", {"title": "Call back", "assigned_to": "usr_gone"}
        )
        task = await TaskRepository(session).create_task(fields)

    assert fields["assigned_to_name"] is None
    async with pg_session_factory() as session:
        assert (await TaskRepository(session).get_by_id(task.id)).title == "Call back"
