"""In-memory link validity cache.

One entry per URL, fragment included: ``page#a`` and ``page#b`` are distinct
keys. Inserts replace the previous entry wholesale, so concurrent checks of
the same URL race harmlessly (last write wins, nothing is ever half-updated).

Every operation holds the lock for a single dict access only. Callers never
hold it across an ``await``.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Iterable

    from weblinkcheck.models.cache import CacheEntry


class Cache:
    """Thread-safe in-memory store implementing CacheProtocol."""

    def __init__(self, entries: Iterable[tuple[httpx.URL, CacheEntry]] = ()) -> None:
        self._entries: dict[httpx.URL, CacheEntry] = dict(entries)
        self._lock = threading.Lock()

    def lookup(self, url: httpx.URL) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(url)

    def url_is_still_valid(
        self, url: httpx.URL, timeout: timedelta, *, now: datetime | None = None
    ) -> bool:
        """Whether ``url`` was verified valid less than ``timeout`` ago."""
        entry = self.lookup(url)
        if entry is None:
            return False
        return entry.is_fresh(now or datetime.now(UTC), timeout)

    def insert(self, url: httpx.URL, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[url] = entry

    def items(self) -> list[tuple[httpx.URL, CacheEntry]]:
        """Point-in-time snapshot of every entry."""
        with self._lock:
            return list(self._entries.items())

    def evict_older_than(self, cutoff: datetime) -> int:
        """Drop entries checked before ``cutoff``. Returns the number removed."""
        with self._lock:
            expired = [url for url, entry in self._entries.items() if entry.checked_at < cutoff]
            for url in expired:
                del self._entries[url]
        return len(expired)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
