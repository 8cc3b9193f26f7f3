"""Board setup from a JSON layout document.

Layout format::

    {
        "name": "standard",
        "pieces": [
            {"kind": "rook", "suit": "white", "square": "a1"},
            ...
        ]
    }
"""

from __future__ import annotations

import logging
from pathlib import Path

from chesspath.config.json_reader import JsonReader, JsonType, JsonValue
from chesspath.core.board import Board
from chesspath.core.enums import PieceKind, Suit
from chesspath.core.piece import create_piece
from chesspath.core.position import Position
from chesspath.errors import ConfigError, LayoutError, OffBoardError
from chesspath.runtime_assets import asset_path

_LOGGER = logging.getLogger(__name__)

STANDARD_LAYOUT = asset_path("layouts", "standard.json")


def _read_entry(entry: JsonValue) -> tuple[PieceKind, Suit, Position]:
    try:
        kind = PieceKind.parse(entry["kind"].as_str())
        suit = Suit.parse(entry["suit"].as_str())
        square = entry["square"].as_str()
    except LayoutError as exc:
        raise LayoutError(f"{entry.path}: {exc}") from exc
    except ConfigError as exc:
        raise LayoutError(str(exc)) from exc
    try:
        position = Position.parse(square)
    except OffBoardError as exc:
        raise LayoutError(f"{entry.path}: {exc}") from exc
    return kind, suit, position


def board_from_layout(layout: JsonValue) -> Board:
    """Build a fresh board from a parsed layout document.

    Raises:
        LayoutError: any entry is malformed; no partial board is returned.
    """
    try:
        entries = layout["pieces"]
    except ConfigError as exc:
        raise LayoutError(str(exc)) from exc
    if entries.type() != JsonType.ARRAY:
        raise LayoutError(f"{entries.path} must be an array")

    board = Board()
    for entry in entries:
        kind, suit, position = _read_entry(entry)
        if not board.is_empty(position):
            raise LayoutError(f"{entry.path}: square {position} is already occupied")
        create_piece(kind, suit, position, board)

    name = layout.get("name")
    _LOGGER.info(
        "Loaded layout %s with %d pieces",
        name.implementation() if name is not None else "<unnamed>",
        len(board),
    )
    return board


def load_layout(path: str | Path) -> Board:
    """Read a layout file and build its board."""
    return board_from_layout(JsonReader.from_path(path).access())


def standard_board() -> Board:
    """Standard chess starting position."""
    return load_layout(STANDARD_LAYOUT)
