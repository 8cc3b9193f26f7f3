"""Configuration layer — JSON navigation and application settings."""

from chesspath.config.json_reader import JsonReader, JsonType, JsonValue
from chesspath.config.settings import AppSettings, load_settings, settings_from_json

__all__ = [
    "AppSettings",
    "JsonReader",
    "JsonType",
    "JsonValue",
    "load_settings",
    "settings_from_json",
]
