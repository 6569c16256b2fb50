"""
Redis client factory.

One client serves both cache and pub/sub use. redis-py connects lazily,
so building the client never blocks startup; an unreachable server only
shows up as a failing ``redis`` probe.
"""

import logging
from typing import Optional

import redis

from app.core.config import Settings

logger = logging.getLogger(__name__)

SOCKET_TIMEOUT_SECONDS = 5.0


def create_redis_client(settings: Settings) -> Optional[redis.Redis]:
    """Build a Redis client from settings.

    Args:
        settings: Application settings.

    Returns:
        A configured client, or None when Redis is disabled.
    """
    if not settings.redis_enabled:
        logger.info("Redis disabled; the redis probe will report 'Not configured'.")
        return None

    client = redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        password=settings.redis_password or None,
        socket_connect_timeout=settings.redis_connect_timeout_seconds,
        socket_timeout=min(SOCKET_TIMEOUT_SECONDS, settings.probe_timeout_seconds),
        decode_responses=True,
    )
    logger.info("Redis client configured for %s:%s", settings.redis_host, settings.redis_port)
    return client


def close_redis_client(client: Optional[redis.Redis]) -> None:
    """Close the client's connection pool. Errors are logged, never raised."""
    if client is None:
        return
    try:
        client.close()
    except Exception:
        logger.exception("Error closing Redis client")
