"""Webhook subscription dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import WebhookSubscriptionRepository


async def get_webhook_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WebhookSubscriptionRepository:
    """Webhook repository for read operations (list, get by id)."""
    return WebhookSubscriptionRepository(db)


async def get_webhook_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> WebhookSubscriptionRepository:
    """Webhook repository for create/update/delete (transactional)."""
    return WebhookSubscriptionRepository(db)
