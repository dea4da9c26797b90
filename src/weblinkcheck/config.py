"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (WEBLINKCHECK__HTTP__TIMEOUT_SECONDS=10)
  2. weblinkcheck.yaml      (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; every field has a default.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("weblinkcheck")
_DEFAULT_DB_PATH = str(Path(_DEFAULT_DATA_DIR) / "links.db")


def _find_config_file() -> str | None:
    """Return the path of the first weblinkcheck.yaml found, or None."""
    candidates = [
        Path("weblinkcheck.yaml"),
        Path(platformdirs.user_config_dir("weblinkcheck")) / "weblinkcheck.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class HttpSettings(BaseModel):
    timeout_seconds: float = 30.0
    user_agent: str = "weblinkcheck/1.0"
    follow_redirects: bool = True
    max_connections: int = 10
    max_keepalive_connections: int = 5
    # Host name -> headers sent to that host and its subdomains
    extra_headers: dict[str, dict[str, str]] = {}


class CacheSettings(BaseModel):
    timeout_hours: float = 24
    db_path: str = _DEFAULT_DB_PATH
    max_age_days: int = 7

    @property
    def timeout(self) -> timedelta:
        return timedelta(hours=self.timeout_hours)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: WEBLINKCHECK__CACHE__TIMEOUT_HOURS=1
        env_prefix="WEBLINKCHECK__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    http: HttpSettings = HttpSettings()
    cache: CacheSettings = CacheSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
