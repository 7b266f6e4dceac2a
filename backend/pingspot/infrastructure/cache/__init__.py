"""Redis-backed shared state."""

from .redis_counter_store import RedisCounterStore, create_redis_client

__all__ = ["RedisCounterStore", "create_redis_client"]
