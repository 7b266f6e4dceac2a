"""Port for a shared atomic counter store."""

from abc import ABC, abstractmethod
from datetime import timedelta


class CounterStore(ABC):
    """Shared counters with expiry (e.g. Redis)."""

    @abstractmethod
    async def increment(self, key: str, ttl: timedelta) -> int:
        """Atomically increment ``key`` and return the new value.

        The expiry is set when the key is created and left alone afterwards.
        """
        ...
