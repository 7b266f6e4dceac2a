"""Admission rate limiting backed by a shared counter store."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from pingspot.application.interfaces import CounterStore
from pingspot.domain.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class AdmissionRateLimiter:
    """Caps how many creations an owner may make per window.

    Every attempt is charged before the limit is checked, so rejected
    attempts still count. When ``per_utc_day`` is set the counter key carries
    the UTC date, giving one bucket per calendar day; otherwise the bucket
    lives for ``window`` from its first use.

    If the counter store is unreachable the attempt is allowed.
    """

    def __init__(
        self,
        counter_store: CounterStore,
        *,
        scope: str,
        limit: int,
        window: timedelta = timedelta(hours=24),
        per_utc_day: bool = True,
        clock: Callable[[], datetime] | None = None,
    ):
        self._counter_store = counter_store
        self._scope = scope
        self._limit = limit
        self._window = window
        self._per_utc_day = per_utc_day
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def limit(self) -> int:
        return self._limit

    def key_for(self, owner_id: str) -> str:
        key = f"ratelimit:{self._scope}:{owner_id}"
        if self._per_utc_day:
            key = f"{key}:{self._clock().astimezone(timezone.utc):%Y-%m-%d}"
        return key

    async def take(self, owner_id: str) -> int | None:
        """Charge one attempt for ``owner_id``.

        Returns the count including this attempt, or None when the counter
        store failed and the attempt was let through.

        Raises:
            RateLimitExceededError: if the count is now above the limit.
        """
        key = self.key_for(owner_id)
        try:
            count = await self._counter_store.increment(key, self._window)
        except Exception:
            logger.exception("Counter store failed for %s; allowing the attempt", key)
            return None

        if count > self._limit:
            logger.warning(
                "Rate limit reached for %s by %s (count=%d, limit=%d)",
                self._scope, owner_id, count, self._limit,
            )
            raise RateLimitExceededError(self._scope, self._limit)
        return count
