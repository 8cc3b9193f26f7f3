"""Core enumerations and the shared direction-vector table."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType
from typing import Final

from chesspath.errors import LayoutError


class Suit(IntEnum):
    """Side a piece belongs to."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Suit:
        return Suit(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, text: str) -> Suit:
        """Parse ``"white"`` / ``"Black"`` etc."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise LayoutError(f"Unknown suit: {text!r}") from None


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Upper-case FEN letter, e.g. ``N`` for a knight."""
        return _KIND_LETTERS[self]

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, text: str) -> PieceKind:
        """Parse a kind name (``"knight"``) or a FEN letter (``"N"``/``"n"``)."""
        key = text.strip()
        if len(key) == 1:
            for kind, letter in _KIND_LETTERS.items():
                if letter == key.upper():
                    return kind
        try:
            return cls[key.upper()]
        except KeyError:
            raise LayoutError(f"Unknown piece kind: {text!r}") from None


_KIND_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "P",
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}


class Direction(IntEnum):
    """The eight compass points. North points towards Black's back rank."""

    NORTH = 0
    NORTH_EAST = 1
    EAST = 2
    SOUTH_EAST = 3
    SOUTH = 4
    SOUTH_WEST = 5
    WEST = 6
    NORTH_WEST = 7

    @property
    def delta(self) -> tuple[int, int]:
        """(Δfile, Δrank) unit vector."""
        return DIRECTION_DELTAS[self]


# ── Direction table ─────────────────────────────────────────────────────────

DIRECTION_DELTAS: Final[Mapping[Direction, tuple[int, int]]] = MappingProxyType(
    {
        Direction.NORTH: (0, 1),
        Direction.NORTH_EAST: (1, 1),
        Direction.EAST: (1, 0),
        Direction.SOUTH_EAST: (1, -1),
        Direction.SOUTH: (0, -1),
        Direction.SOUTH_WEST: (-1, -1),
        Direction.WEST: (-1, 0),
        Direction.NORTH_WEST: (-1, 1),
    }
)

ORTHOGONALS: Final[tuple[Direction, ...]] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)
DIAGONALS: Final[tuple[Direction, ...]] = (
    Direction.NORTH_EAST,
    Direction.SOUTH_EAST,
    Direction.SOUTH_WEST,
    Direction.NORTH_WEST,
)
ALL_DIRECTIONS: Final[tuple[Direction, ...]] = tuple(Direction)
