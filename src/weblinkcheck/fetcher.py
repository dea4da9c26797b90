"""HTTP probes for link checking.

``head`` answers "does this resource exist" from the status code alone.
``get`` is only used when a page body has to be searched for an anchor.
Both receive the shared httpx.AsyncClient from the caller's context; the
caller owns the client lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from weblinkcheck.errors import LinkCheckError, Reason

if TYPE_CHECKING:
    from collections.abc import Mapping

    from weblinkcheck.config import Settings

log = structlog.get_logger()


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=settings.http.follow_redirects,
        timeout=httpx.Timeout(settings.http.timeout_seconds),
        headers={"User-Agent": settings.http.user_agent},
        limits=httpx.Limits(
            max_connections=settings.http.max_connections,
            max_keepalive_connections=settings.http.max_keepalive_connections,
        ),
    )


def _host_matches(hostname: str, pattern: str) -> bool:
    """``'docs.example.com'`` matches ``'example.com'`` and ``'docs.example.com'``."""
    hostname = hostname.rstrip(".").lower()
    pattern = pattern.rstrip(".").lower()
    return hostname == pattern or hostname.endswith("." + pattern)


def headers_for_url(url: httpx.URL, extra_headers: Mapping[str, Mapping[str, str]]) -> httpx.Headers:
    """Collect the configured extra headers that apply to ``url``.

    Patterns are applied from least to most specific, so a subdomain entry
    overrides a header set for its parent domain.
    """
    headers = httpx.Headers()
    matching = [pattern for pattern in extra_headers if _host_matches(url.host, pattern)]
    for pattern in sorted(matching, key=lambda p: p.count(".")):
        headers.update(extra_headers[pattern])
    return headers


def _failure(url: httpx.URL, response: httpx.Response) -> LinkCheckError:
    return LinkCheckError(
        Reason.HTTP,
        f"HTTP {response.status_code} for {url}",
        url=str(url),
        status_code=response.status_code,
    )


async def get(client: httpx.AsyncClient, url: httpx.URL, headers: httpx.Headers) -> httpx.Response:
    """Send a GET request and return the response with its body still unread.

    The caller reads the body with ``await response.aread()`` and must close
    the response. Raises LinkCheckError on transport failure or a 4xx/5xx
    status; in that case the response is already closed.
    """
    request = client.build_request("GET", url, headers=headers)
    try:
        response = await client.send(request, stream=True)
    except httpx.HTTPError as exc:
        log.debug("probe_failed", method="GET", url=str(url), error=str(exc))
        raise LinkCheckError(
            Reason.HTTP, f"Network error fetching {url}: {exc}", url=str(url)
        ) from exc

    if response.is_error:
        await response.aclose()
        log.debug("probe_failed", method="GET", url=str(url), status_code=response.status_code)
        raise _failure(url, response)

    return response


async def head(client: httpx.AsyncClient, url: httpx.URL, headers: httpx.Headers) -> None:
    """Send a HEAD request. Raises LinkCheckError unless the resource exists."""
    try:
        response = await client.head(url, headers=headers)
    except httpx.HTTPError as exc:
        log.debug("probe_failed", method="HEAD", url=str(url), error=str(exc))
        raise LinkCheckError(
            Reason.HTTP, f"Network error checking {url}: {exc}", url=str(url)
        ) from exc

    if response.is_error:
        log.debug("probe_failed", method="HEAD", url=str(url), status_code=response.status_code)
        raise _failure(url, response)
