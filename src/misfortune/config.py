"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (MISFORTUNE__FORTUNES__PREFIXES=zen;tao)
  2. misfortune.yaml        (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional — all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_DATA_DIR = platformdirs.user_data_dir("misfortune")
_DEFAULT_FORTUNES_DIR = str(Path(_DEFAULT_DATA_DIR) / "fortunes")


def _find_config_file() -> str | None:
    """Return the path of the first misfortune.yaml found, or None."""
    candidates = [
        Path("misfortune.yaml"),
        Path(platformdirs.user_config_dir("misfortune")) / "misfortune.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class FortunesSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    directory: str = _DEFAULT_FORTUNES_DIR
    # ";"-separated relative path prefixes, e.g. "zen;computers/"
    prefixes: str | None = None
    # Regular expression searched for in each relative path
    regex: str | None = None


class IndexSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Drop cached entries for files that disappeared from disk on refresh.
    prune_deleted: bool = False


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: MISFORTUNE__LOGGING__LEVEL=DEBUG
        env_prefix="MISFORTUNE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    fortunes: FortunesSettings = FortunesSettings()
    index: IndexSettings = IndexSettings()
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
