"""SQLite persistence for the link validity cache.

Lets a caller keep verified links between runs: load the table into a
``Cache`` at startup, save it back at shutdown. Link checks themselves only
ever touch the in-memory store.

All operations catch ``aiosqlite.Error`` internally and degrade gracefully:
a failed load leaves the cache as it was (every link is simply re-checked),
a failed save is logged and ignored. Errors are logged with ``exc_info=True``
so they remain observable via stderr.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import aiosqlite
import httpx
import structlog

from weblinkcheck.models.cache import CacheEntry

if TYPE_CHECKING:
    from weblinkcheck.cache import Cache

log = structlog.get_logger()

_CREATE_LINK_TABLE = """
CREATE TABLE IF NOT EXISTS link_cache (
    url        TEXT PRIMARY KEY,
    checked_at TEXT NOT NULL,
    valid      INTEGER NOT NULL
)
"""

_CREATE_LINK_INDEX = "CREATE INDEX IF NOT EXISTS idx_link_checked ON link_cache(checked_at)"


class CacheDatabase:
    """Loads and saves ``Cache`` contents to a SQLite database."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def init_db(self) -> None:
        """Create tables and set WAL mode. Called once at startup."""
        await self._db.execute("PRAGMA journal_mode = WAL")
        await self._db.execute(_CREATE_LINK_TABLE)
        await self._db.execute(_CREATE_LINK_INDEX)
        await self._db.commit()

    async def load(self, cache: Cache) -> int:
        """Insert every stored row into ``cache``. Returns the number loaded."""
        try:
            cursor = await self._db.execute("SELECT url, checked_at, valid FROM link_cache")
            rows = await cursor.fetchall()
        except aiosqlite.Error:
            log.warning("cache_load_error", exc_info=True)
            return 0

        loaded = 0
        for url, checked_at, valid in rows:
            try:
                key = httpx.URL(url)
                entry = CacheEntry(
                    checked_at=datetime.fromisoformat(checked_at),
                    valid=bool(valid),
                )
            except (httpx.InvalidURL, ValueError):
                log.warning("cache_row_skipped", url=url)
                continue
            cache.insert(key, entry)
            loaded += 1

        log.info("cache_loaded", entries=loaded)
        return loaded

    async def save(self, cache: Cache) -> int:
        """Write a snapshot of ``cache``. Non-fatal on failure."""
        rows = [
            (str(url), entry.checked_at.isoformat(), int(entry.valid))
            for url, entry in cache.items()
        ]
        try:
            await self._db.executemany(
                "INSERT OR REPLACE INTO link_cache (url, checked_at, valid) VALUES (?, ?, ?)",
                rows,
            )
            await self._db.commit()
        except aiosqlite.Error:
            log.warning("cache_write_error", entries=len(rows), exc_info=True)
            return 0

        log.info("cache_saved", entries=len(rows))
        return len(rows)

    async def cleanup_expired(self, max_age: timedelta) -> None:
        """Delete rows checked more than ``max_age`` ago. Non-fatal on failure."""
        try:
            cutoff = (datetime.now(UTC) - max_age).isoformat()
            cursor = await self._db.execute(
                "DELETE FROM link_cache WHERE checked_at < ?", (cutoff,)
            )
            deleted = cursor.rowcount
            await self._db.commit()
            log.info("cache_cleanup_complete", deleted=deleted)
        except aiosqlite.Error:
            log.warning("cache_cleanup_error", exc_info=True)
