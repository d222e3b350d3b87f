"""Messaging: in-process dispatch outbox and workflow execution notifications."""

from app.infrastructure.messaging.execution_notifier import (
    LogOnlyExecutionNotifier,
    RedisExecutionNotifier,
)
from app.infrastructure.messaging.outbox import (
    DirectOutboxPublisher,
    DispatchOutbox,
    SessionOutboxPublisher,
    defer_until_commit,
)

__all__ = [
    "DirectOutboxPublisher",
    "DispatchOutbox",
    "LogOnlyExecutionNotifier",
    "RedisExecutionNotifier",
    "SessionOutboxPublisher",
    "defer_until_commit",
]
