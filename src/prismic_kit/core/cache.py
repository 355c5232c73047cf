"""Single-flight TTL cache used to memoize the descriptor fetch."""

import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any

from loguru import logger

_MISSING = object()


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    # Absolute expiry time in clock seconds, 0 means never.
    expires_at: float = 0


@dataclass(frozen=True)
class CacheResult:
    """Producer return value carrying its own TTL (e.g. from a max-age header)."""

    value: Any
    ttl: float | None = None


class ApiCache:
    """Key/value cache with per-entry TTL and in-flight deduplication.

    At most one producer runs per key at any time. While it runs, callers for
    the same key get the stale entry if there is one, otherwise they wait for
    the running producer and receive its result (or its exception).

    There is no eviction besides expiry.
    """

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._in_flight: dict[str, Future[Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return the usable cached value, or None."""
        with self._lock:
            value = self._lookup(key)
        return None if value is _MISSING else value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value; a TTL of 0 never expires."""
        with self._lock:
            self._entries[key] = CacheEntry(value, self._expiry(ttl))

    def get_or_set(self, key: str, ttl: float, producer: Callable[[], Any]) -> Any:
        """Return the cached value, or run ``producer`` once to fill it.

        ``producer`` returns the value, or a CacheResult whose ``ttl`` overrides
        the one given here. A producer failure is not cached: the exception
        reaches this caller and every waiter, and the next call retries.
        """
        with self._lock:
            found = self._lookup(key)
            if found is not _MISSING:
                return found
            in_flight = self._in_flight.get(key)
            owner = in_flight is None
            if in_flight is None:
                in_flight = Future()
                self._in_flight[key] = in_flight

        if not owner:
            logger.debug("Waiting for in-flight producer of {!r}", key)
            return in_flight.result()

        logger.debug("Cache miss for {!r}, running producer", key)
        try:
            produced = producer()
        except BaseException as exc:
            with self._lock:
                del self._in_flight[key]
            in_flight.set_exception(exc)
            raise

        if isinstance(produced, CacheResult):
            value = produced.value
            entry_ttl = ttl if produced.ttl is None else produced.ttl
        else:
            value, entry_ttl = produced, ttl

        with self._lock:
            self._entries[key] = CacheEntry(value, self._expiry(entry_ttl))
            del self._in_flight[key]
        in_flight.set_result(value)
        return value

    def is_expired(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._entry_expired(entry)

    def is_in_progress(self, key: str) -> bool:
        with self._lock:
            return key in self._in_flight

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _lookup(self, key: str) -> Any:
        # Caller holds the lock.
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        if self._entry_expired(entry) and key not in self._in_flight:
            return _MISSING
        return entry.value

    def _entry_expired(self, entry: CacheEntry) -> bool:
        return entry.expires_at != 0 and entry.expires_at < self._clock()

    def _expiry(self, ttl: float) -> float:
        return self._clock() + ttl if ttl else 0
