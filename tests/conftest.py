"""Shared test fixtures for the weblinkcheck test suite."""

from __future__ import annotations

import pytest

from weblinkcheck.cache import Cache
from weblinkcheck.config import Settings

GUIDE_HTML = b"""<!DOCTYPE html>
<html>
<head><title>Guide</title></head>
<body>
  <h1 id="intro">Introduction</h1>
  <section id="install"><p>pip install it</p></section>
  <section id="usage"><p>Use it</p></section>
</body>
</html>
"""


@pytest.fixture()
def settings() -> Settings:
    return Settings(cache={"timeout_hours": 1})


@pytest.fixture()
def cache() -> Cache:
    return Cache()


@pytest.fixture()
def guide_html() -> bytes:
    """A page with anchors intro, install and usage, in that order."""
    return GUIDE_HTML
