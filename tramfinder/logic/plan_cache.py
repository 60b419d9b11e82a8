"""Short-lived memo of computed trip plans, keyed by boarding request."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
import time
from typing import Callable, Generic, TypeVar

from tramfinder.logic.boarding import BoardingRequest, boarding_request_key

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60.0

T = TypeVar("T")


@dataclass(frozen=True)
class _CacheEntry(Generic[T]):
    value: T
    computed_at: float


class PlanCache(Generic[T]):
    """TTL cache with one slot per boarding request.

    Concurrent callers for the same request wait on a per-key lock so a plan is
    computed at most once per TTL window. A key lock lives only while callers
    hold or wait on it. A failed computation stores nothing.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _CacheEntry[T]] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._key_users: dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, request: BoardingRequest) -> T | None:
        """Return the cached value for a request if it is still fresh."""
        key = boarding_request_key(request)
        with self._lock:
            return self._fresh_value(key)

    def get_or_compute(self, request: BoardingRequest, compute: Callable[[], T]) -> T:
        """Return the fresh cached value for a request, computing it if needed."""
        key = boarding_request_key(request)
        with self._lock:
            cached = self._fresh_value(key)
            if cached is not None:
                logger.debug("Plan cache hit for %s", key[:12])
                return cached
            key_lock = self._key_locks.setdefault(key, threading.Lock())
            self._key_users[key] = self._key_users.get(key, 0) + 1

        try:
            with key_lock:
                with self._lock:
                    cached = self._fresh_value(key)
                if cached is not None:
                    logger.debug("Plan cache hit for %s after wait", key[:12])
                    return cached

                logger.debug("Plan cache miss for %s", key[:12])
                value = compute()
                with self._lock:
                    self._entries[key] = _CacheEntry(value=value, computed_at=self._clock())
                    self._evict_expired()
                return value
        finally:
            with self._lock:
                self._release_key_lock(key)

    def invalidate(self, request: BoardingRequest | None = None) -> None:
        """Drop the entry for one request, or every entry when ``request`` is None."""
        with self._lock:
            if request is None:
                self._entries.clear()
                return
            self._entries.pop(boarding_request_key(request), None)

    def _fresh_value(self, key: str) -> T | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.computed_at >= self._ttl_seconds:
            return None
        return entry.value

    def _release_key_lock(self, key: str) -> None:
        remaining = self._key_users.get(key, 0) - 1
        if remaining > 0:
            self._key_users[key] = remaining
            return
        self._key_users.pop(key, None)
        self._key_locks.pop(key, None)

    def _evict_expired(self) -> None:
        now = self._clock()
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.computed_at >= self._ttl_seconds
        ]
        for key in expired:
            del self._entries[key]


__all__ = ["DEFAULT_TTL_SECONDS", "PlanCache"]
