"""Application settings loaded from a JSON document."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chesspath.config.json_reader import JsonReader, JsonType, JsonValue
from chesspath.errors import ConfigError
from chesspath.runtime_assets import asset_path, resolve_asset

_LOGGER = logging.getLogger(__name__)

DEFAULT_SETTINGS = asset_path("settings.json")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Board
    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_trajectories: bool = True
    animate_moves: bool = True
    tile_size: int = 80

    # Setup
    layout: str = "layouts/standard.json"

    # Assets
    assets_dir: str | None = None
    piece_assets: dict[str, str] = field(default_factory=dict)

    # Diagnostics
    log_level: str = "INFO"

    def layout_path(self) -> Path:
        return resolve_asset(self, self.layout)


def _read_optional_str(value: JsonValue) -> str | None:
    if value.is_null():
        return None
    return value.as_str()


def _read_str_map(value: JsonValue) -> dict[str, str]:
    if value.type() != JsonType.OBJECT:
        raise ConfigError(f"Expected object at {value.path}")
    return {key: item.as_str() for key, item in value.object().items()}


def _read_log_level(value: JsonValue) -> str:
    level = value.as_str().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"Unknown log level {level!r} at {value.path}")
    return level


def _read_tile_size(value: JsonValue) -> int:
    size = value.as_int()
    if size < 16:
        raise ConfigError(f"tile_size must be at least 16, got {size}")
    return size


_READERS: dict[str, Callable[[JsonValue], Any]] = {
    "board_theme": JsonValue.as_str,
    "show_coordinates": JsonValue.as_bool,
    "show_trajectories": JsonValue.as_bool,
    "animate_moves": JsonValue.as_bool,
    "tile_size": _read_tile_size,
    "layout": JsonValue.as_str,
    "assets_dir": _read_optional_str,
    "piece_assets": _read_str_map,
    "log_level": _read_log_level,
}


def settings_from_json(root: JsonValue, base: AppSettings | None = None) -> AppSettings:
    """Overlay the keys present in *root* onto *base* (or the defaults)."""
    if root.type() != JsonType.OBJECT:
        raise ConfigError(f"Settings document must be an object, got {root.type().name}")
    settings = base if base is not None else AppSettings()
    for key, value in root.object().items():
        reader = _READERS.get(key)
        if reader is None:
            _LOGGER.warning("Ignoring unknown setting %r", key)
            continue
        setattr(settings, key, reader(value))
    return settings


def load_settings(path: str | Path | None = None) -> AppSettings:
    """Bundled defaults, overlaid with the settings file at *path* if given."""
    settings = settings_from_json(JsonReader.from_path(DEFAULT_SETTINGS).access())
    if path is not None:
        _LOGGER.info("Loading settings from %s", path)
        settings_from_json(JsonReader.from_path(path).access(), settings)
    return settings
