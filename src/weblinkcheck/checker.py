"""Web link checker.

Decides between a cache hit and a live probe, picks HEAD (no fragment) or
GET plus an anchor scan (fragment), and records every live result in the
context's cache. Failures are raised as LinkCheckError for the caller to
aggregate; nothing here retries.

A successful page fetch caches the page itself and, when a cache is
present, every anchor found on it. Checking ``page#a`` therefore makes later
checks of ``page#b`` and ``page#c`` free until the entries go stale.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from weblinkcheck import fetcher
from weblinkcheck.errors import LinkCheckError, Reason
from weblinkcheck.models.cache import CacheEntry
from weblinkcheck.parser import Visit, visit_element_ids

if TYPE_CHECKING:
    from weblinkcheck.protocols import Context


async def check_web(url: httpx.URL | str, ctx: Context) -> None:
    """Check that ``url`` points to an existing resource (and anchor).

    Raises LinkCheckError with ``Reason.HTTP`` when the probe fails and
    ``Reason.DOM`` when the page loads but the anchor is not on it.
    """
    url = httpx.URL(url)
    log = structlog.get_logger().bind(url=str(url))
    log.debug("check_web_started")

    if _already_valid(url, ctx):
        log.debug("cache_hit")
        return

    if url.fragment:
        await _check_fragment(url, url.fragment, ctx)
    else:
        await _check_resource(url, ctx)


async def _check_resource(url: httpx.URL, ctx: Context) -> None:
    try:
        await fetcher.head(ctx.client(), url, ctx.url_specific_headers(url))
    except LinkCheckError:
        _update_cache(url, ctx, CacheEntry.now(valid=False))
        raise
    _update_cache(url, ctx, CacheEntry.now(valid=True))


async def _check_fragment(url: httpx.URL, fragment: str, ctx: Context) -> None:
    log = structlog.get_logger().bind(url=str(url))
    log.debug("checking_fragment", fragment=fragment)

    page = url.copy_with(fragment=None)
    try:
        html = await _fetch_page(page, ctx.url_specific_headers(url), ctx)
    except LinkCheckError:
        _update_cache(url, ctx, CacheEntry.now(valid=False))
        raise

    cache = ctx.cache()
    _update_cache(page, ctx, CacheEntry.now(valid=True))
    found = False

    def visit(element_id: str) -> Visit:
        nonlocal found
        if element_id == fragment:
            found = True
        if cache is None:
            # No cache: stop at the first match
            return Visit.STOP if found else Visit.CONTINUE
        try:
            key = page.copy_with(fragment=element_id)
        except httpx.InvalidURL:
            log.debug("anchor_not_cacheable", element_id=element_id)
            return Visit.CONTINUE
        cache.insert(key, CacheEntry.now(valid=True))
        return Visit.CONTINUE

    visit_element_ids(html, visit)

    if not found:
        log.debug("anchor_missing", fragment=fragment)
        _update_cache(url, ctx, CacheEntry.now(valid=False))
        raise LinkCheckError(
            Reason.DOM,
            f"No element with id {fragment!r} on {page}",
            url=str(url),
        )

    # The requested spelling of the key can differ from the one rebuilt from the id
    _update_cache(url, ctx, CacheEntry.now(valid=True))


async def _fetch_page(page: httpx.URL, headers: httpx.Headers, ctx: Context) -> bytes:
    response = await fetcher.get(ctx.client(), page, headers)
    try:
        return await response.aread()
    except httpx.HTTPError as exc:
        raise LinkCheckError(
            Reason.HTTP, f"Network error reading {page}: {exc}", url=str(page)
        ) from exc
    finally:
        await response.aclose()


def _already_valid(url: httpx.URL, ctx: Context) -> bool:
    cache = ctx.cache()
    if cache is None:
        return False
    return cache.url_is_still_valid(url, ctx.cache_timeout())


def _update_cache(url: httpx.URL, ctx: Context, entry: CacheEntry) -> None:
    cache = ctx.cache()
    if cache is not None:
        cache.insert(url, entry)
