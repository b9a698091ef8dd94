"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- OSN_LOADER_DEFAULT_SPEED=30
- OSN_LOADER_HIGHWAY_ATTRIBUTES='["residential", "primary"]'
- OSN_EXPORT_LAYOUT_PROGRAM=dot
- OSN_LOG_LEVEL=DEBUG
- OSN_LOG_FILE=/tmp/osm_simple_nav.log
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

HIGHWAY_ATTRIBUTES: Tuple[str, ...] = (
    "residential",
    "motorway",
    "trunk",
    "primary",
    "secondary",
    "tertiary",
    "unclassified",
)


class LoaderConfig(BaseSettings):
    """Map loading configuration.

    Environment variables prefixed with OSN_LOADER_.
    """

    model_config = SettingsConfigDict(env_prefix="OSN_LOADER_")

    highway_attributes: Tuple[str, ...] = HIGHWAY_ATTRIBUTES
    default_speed: float = 50.0


class ExportConfig(BaseSettings):
    """Graph export configuration.

    Environment variables prefixed with OSN_EXPORT_.
    """

    model_config = SettingsConfigDict(env_prefix="OSN_EXPORT_")

    layout_program: str = "neato"
    node_shape: str = "point"
    map_tiles: str = "OpenStreetMap"
    line_color: str = "blue"
    line_weight: int = 2


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with OSN_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="OSN_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[Path] = Path("log") / "logfile.log"
    console_level: str = "WARNING"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.loader.highway_attributes)

    Environment variables prefixed with OSN_.
    """

    model_config = SettingsConfigDict(env_prefix="OSN_")

    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
