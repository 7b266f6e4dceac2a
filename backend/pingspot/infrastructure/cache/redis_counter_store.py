"""CounterStore adapter backed by Redis."""

import logging
from datetime import timedelta

from redis.asyncio import Redis

from pingspot.application.interfaces import CounterStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "pingspot:"


def create_redis_client(url: str) -> Redis:
    """Build a pooled asyncio Redis client; no connection is made until first use."""
    return Redis.from_url(url, decode_responses=True)


class RedisCounterStore(CounterStore):
    """INCR + EXPIRE NX in one MULTI/EXEC, so the TTL is set exactly once per key."""

    def __init__(self, client: Redis, key_prefix: str = KEY_PREFIX):
        self._client = client
        self._key_prefix = key_prefix

    async def increment(self, key: str, ttl: timedelta) -> int:
        full_key = f"{self._key_prefix}{key}"
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.incr(full_key)
            pipe.expire(full_key, ttl, nx=True)
            count, _ = await pipe.execute()
        logger.debug("Counter %s is now %s", full_key, count)
        return int(count)
