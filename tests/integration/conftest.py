"""Integration test fixtures.

Provides CheckerState instances wired with a real httpx client (requests are
intercepted by respx in each test), with and without a link cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from weblinkcheck.fetcher import build_http_client
from weblinkcheck.state import CheckerState

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from weblinkcheck.cache import Cache
    from weblinkcheck.config import Settings


@pytest.fixture()
async def state(settings: Settings, cache: Cache) -> AsyncIterator[CheckerState]:
    """CheckerState with an empty in-memory cache."""
    async with build_http_client(settings) as client:
        yield CheckerState(settings=settings, http_client=client, link_cache=cache)


@pytest.fixture()
async def uncached_state(settings: Settings) -> AsyncIterator[CheckerState]:
    """CheckerState without a cache: every check goes to the network."""
    async with build_http_client(settings) as client:
        yield CheckerState(settings=settings, http_client=client)
