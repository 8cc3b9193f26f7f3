"""Read-only navigable view over a parsed JSON document.

Quick start::

    reader = JsonReader.from_path("layout.json")
    first = reader.navigate("pieces", 0)
    kind = first["kind"].as_str()
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from enum import IntEnum, auto
from pathlib import Path
from typing import Any, TextIO

from chesspath.errors import ConfigError

PathPart = str | int


class JsonType(IntEnum):
    """Kind of a JSON value."""

    NULL = auto()
    BOOLEAN = auto()
    INTEGER = auto()
    DOUBLE = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


def _type_of(raw: Any) -> JsonType:
    # bool is a subclass of int, so it must be tested first
    if raw is None:
        return JsonType.NULL
    if isinstance(raw, bool):
        return JsonType.BOOLEAN
    if isinstance(raw, int):
        return JsonType.INTEGER
    if isinstance(raw, float):
        return JsonType.DOUBLE
    if isinstance(raw, str):
        return JsonType.STRING
    if isinstance(raw, list):
        return JsonType.ARRAY
    return JsonType.OBJECT


class JsonValue:
    """A value inside a :class:`JsonReader` document.

    Instances are lightweight views; several may refer to the same node.
    """

    __slots__ = ("_raw", "_parent", "_key")

    def __init__(
        self,
        raw: Any,
        parent: JsonValue | None = None,
        key: PathPart | None = None,
    ) -> None:
        self._raw = raw
        self._parent = parent
        self._key = key

    # ── Structure ────────────────────────────────────────────────────────

    def type(self) -> JsonType:
        return _type_of(self._raw)

    def is_null(self) -> bool:
        return self._raw is None

    @property
    def path(self) -> str:
        """Location of this value, e.g. ``$.pieces[3].kind``."""
        if self._parent is None:
            return "$"
        if isinstance(self._key, int):
            return f"{self._parent.path}[{self._key}]"
        return f"{self._parent.path}.{self._key}"

    def parent(self) -> JsonValue:
        if self._parent is None:
            raise ConfigError("No parent json value")
        return self._parent

    def __getitem__(self, key: PathPart) -> JsonValue:
        if isinstance(key, bool):
            raise ConfigError(f"Invalid key {key!r} at {self.path}")
        if isinstance(key, str):
            if not isinstance(self._raw, dict):
                raise ConfigError(f"{self.path} is not an object (looking up {key!r})")
            if key not in self._raw:
                raise ConfigError(f"Missing key {key!r} at {self.path}")
            return JsonValue(self._raw[key], self, key)
        if isinstance(key, int):
            if not isinstance(self._raw, list):
                raise ConfigError(f"{self.path} is not an array (index {key})")
            if not 0 <= key < len(self._raw):
                raise ConfigError(
                    f"Index {key} out of range at {self.path} (length {len(self._raw)})"
                )
            return JsonValue(self._raw[key], self, key)
        raise ConfigError(f"Invalid key {key!r} at {self.path}")

    def get(self, key: str, default: Any = None) -> JsonValue | Any:
        """Member *key* of an object value, or *default* when absent."""
        if isinstance(self._raw, dict) and key in self._raw:
            return JsonValue(self._raw[key], self, key)
        return default

    def __contains__(self, key: object) -> bool:
        return isinstance(self._raw, dict) and key in self._raw

    def length(self) -> int:
        """Length of an array value, 0 for anything else."""
        if isinstance(self._raw, list):
            return len(self._raw)
        return 0

    def __iter__(self) -> Iterator[JsonValue]:
        for i in range(self.length()):
            yield JsonValue(self._raw[i], self, i)

    def object(self) -> dict[str, JsonValue]:
        """Key → value view of an object, empty for anything else."""
        if not isinstance(self._raw, dict):
            return {}
        return {k: JsonValue(v, self, k) for k, v in self._raw.items()}

    # ── Scalars ──────────────────────────────────────────────────────────

    def _mismatch(self, wanted: str) -> ConfigError:
        return ConfigError(
            f"Expected {wanted} at {self.path}, got {self.type().name.lower()}"
        )

    def as_str(self) -> str:
        if not isinstance(self._raw, str):
            raise self._mismatch("string")
        return self._raw

    def as_int(self) -> int:
        """Integer value; booleans coerce to 0/1, integral doubles are accepted."""
        raw = self._raw
        if isinstance(raw, int):
            return int(raw)
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        raise self._mismatch("integer")

    def as_bool(self) -> bool:
        if not isinstance(self._raw, bool):
            raise self._mismatch("boolean")
        return self._raw

    def as_float(self) -> float:
        if isinstance(self._raw, bool) or not isinstance(self._raw, int | float):
            raise self._mismatch("number")
        return float(self._raw)

    def implementation(self) -> Any:
        """The underlying decoded Python object."""
        return self._raw

    def __repr__(self) -> str:
        return f"JsonValue({self.path}, {self.type().name.lower()})"


class JsonReader:
    """An immutable JSON document held in memory."""

    __slots__ = ("_root",)

    def __init__(self, source: str | TextIO) -> None:
        if isinstance(source, str):
            text = source
        else:
            if source.closed:
                raise ConfigError("stream given to JsonReader in bad state")
            text = source.read()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Error loading JSON: {exc}") from exc
        self._root = JsonValue(data)

    @classmethod
    def from_path(cls, path: str | Path) -> JsonReader:
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Cannot read JSON file {file_path}: {exc}") from exc
        return cls(text)

    def access(self) -> JsonValue:
        return self._root

    def __call__(self) -> JsonValue:
        return self._root

    def navigate(self, *path: PathPart) -> JsonValue:
        """Follow object keys and array indices from the root."""
        value = self._root
        for part in path:
            value = value[part]
        return value
