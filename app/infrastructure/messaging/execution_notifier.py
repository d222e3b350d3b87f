"""Workflow execution notifications over Redis pub/sub.

The external workflow runner subscribes to the execution channel and
picks up each pending execution from the message
{execution_id, workflow_id, trigger_type}. When Redis is disabled or
down the log-only notifier stands in; the pending row is still there
for a polling runner.
"""

from __future__ import annotations

import json

import redis.asyncio as redis

from app.core.config import get_settings
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RedisExecutionNotifier:
    """IExecutionNotifier publishing on the configured Redis channel."""

    def __init__(
        self, redis_client: redis.Redis | None = None, channel: str | None = None
    ) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.settings = get_settings()
        self.redis = redis_client
        self.channel = channel or self.settings.execution_channel
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self._connected:
            return
        try:
            password = self.settings.redis_password
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=5,
            )
            await self.redis.ping()
            self._connected = True
            logger.info("Redis execution notifier connected")
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis execution notifier connection failed: %s", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self._connected = False
            logger.info("Redis execution notifier disconnected")

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def notify(self, execution_id: str, workflow_id: str, trigger_type: str) -> bool:
        """Publish the execution message.

        Returns:
            True if published, False if Redis is unavailable or publish failed.
        """
        if not self.is_available() or self.redis is None:
            logger.debug("Redis not available, execution %s not announced", execution_id)
            return False
        message = json.dumps(
            {
                "execution_id": execution_id,
                "workflow_id": workflow_id,
                "trigger_type": trigger_type,
            }
        )
        try:
            await self.redis.publish(self.channel, message)
        except Exception:
            logger.exception("Failed to publish execution %s", execution_id)
            return False
        return True


class LogOnlyExecutionNotifier:
    """IExecutionNotifier that only logs. Use when Redis is not configured."""

    async def notify(self, execution_id: str, workflow_id: str, trigger_type: str) -> bool:
        logger.info(
            "Workflow execution pending: execution=%s workflow=%s trigger=%s",
            execution_id,
            workflow_id,
            trigger_type,
        )
        return True
