"""Default checker context.

CheckerState is created once by the application and passed to every
``check_web`` call. It owns nothing: the application opens and closes the
http client, and decides whether a cache is used at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from weblinkcheck.fetcher import headers_for_url

if TYPE_CHECKING:
    from datetime import timedelta

    import httpx

    from weblinkcheck.config import Settings
    from weblinkcheck.protocols import CacheProtocol


@dataclass
class CheckerState:
    """Holds the shared runtime state. Implements the Context protocol."""

    settings: Settings
    http_client: httpx.AsyncClient
    link_cache: CacheProtocol | None = None

    def client(self) -> httpx.AsyncClient:
        return self.http_client

    def url_specific_headers(self, url: httpx.URL) -> httpx.Headers:
        return headers_for_url(url, self.settings.http.extra_headers)

    def cache(self) -> CacheProtocol | None:
        return self.link_cache

    def cache_timeout(self) -> timedelta:
        return self.settings.cache.timeout
