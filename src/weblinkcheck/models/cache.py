from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """Outcome of the most recent live check for one cache key."""

    model_config = ConfigDict(frozen=True)

    checked_at: datetime
    valid: bool

    @classmethod
    def now(cls, valid: bool) -> CacheEntry:
        return cls(checked_at=datetime.now(UTC), valid=valid)

    def is_fresh(self, now: datetime, timeout: timedelta) -> bool:
        """True only for a verified-valid entry younger than ``timeout``.

        Failed entries are never fresh: failures may be transient, so they
        always trigger a re-check.
        """
        return self.valid and now - self.checked_at < timeout
