"""Cache Utilities Module."""

import time
from collections.abc import Callable
from typing import Generic, TypeVar

import cachetools

__all__ = ["TTLStore"]

V = TypeVar("V")


class TTLStore(Generic[V]):
    """Unbounded key/value store whose entries expire a fixed time after insertion.

    Backed by ``cachetools.TTLCache``: every entry records its expiry time when it
    is stored, and a read at or after that time treats the entry as absent.
    Expired entries are evicted lazily during reads and writes, so there are no
    background timers and a re-stored key always gets a fresh lifetime.

    Args:
        ttl (float): Lifetime of each entry in seconds.
        timer (Callable[[], float]): Monotonic clock used for expiry. Defaults to
            ``time.monotonic``; tests pass a fake clock.
    """

    def __init__(
        self, ttl: float, timer: Callable[[], float] = time.monotonic
    ) -> None:
        self.ttl = ttl
        # 'infinitely' large cache, entries only leave through expiry
        self._cache: cachetools.TTLCache = cachetools.TTLCache(
            maxsize=2**32, ttl=ttl, timer=timer
        )

    def get(self, key: str) -> V | None:
        """Return the live value stored under ``key``, or None."""
        self._cache.expire()
        return self._cache.get(key)

    def put(self, key: str, value: V) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds from now."""
        self._cache[key] = value

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache
