from __future__ import annotations

from weblinkcheck.models.cache import CacheEntry

__all__ = [
    "CacheEntry",
]
