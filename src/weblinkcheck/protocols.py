"""Protocol interfaces for the checker's collaborators.

``check_web`` references these protocols, not the concrete implementations.
This allows:
- Tests to use lightweight fakes for the context
- Other cache backends (e.g. a shared Redis store) to be swapped in without
  changing the checker
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime, timedelta

    import httpx

    from weblinkcheck.models.cache import CacheEntry


class CacheProtocol(Protocol):
    """Interface for the link validity cache.

    Implementations must keep each call short and non-suspending: the checker
    calls them from coroutines between network awaits, and many checks share
    one store.
    """

    def lookup(self, url: httpx.URL) -> CacheEntry | None: ...

    def url_is_still_valid(
        self, url: httpx.URL, timeout: timedelta, *, now: datetime | None = None
    ) -> bool: ...

    def insert(self, url: httpx.URL, entry: CacheEntry) -> None: ...


class Context(Protocol):
    """Capabilities ``check_web`` needs from its caller."""

    def client(self) -> httpx.AsyncClient: ...

    def url_specific_headers(self, url: httpx.URL) -> httpx.Headers: ...

    def cache(self) -> CacheProtocol | None: ...

    def cache_timeout(self) -> timedelta: ...
