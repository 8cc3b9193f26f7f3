"""Position — an on-board square with direction arithmetic.

Files and ranks are zero-based: ``Position(0, 0)`` is a1 and
``Position(7, 7)`` is h8.  Every constructed instance is on the board.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from chesspath.core.enums import DIRECTION_DELTAS, Direction
from chesspath.errors import OffBoardError

BOARD_SIZE: Final = 8

_FILES: Final = "abcdefgh"
_RANKS: Final = "12345678"


@dataclass(frozen=True, order=True, slots=True)
class Position:
    """Immutable (file, rank) coordinate."""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not Position.is_valid(self.file, self.rank):
            raise OffBoardError(f"Off-board coordinate: ({self.file}, {self.rank})")

    @staticmethod
    def is_valid(file: int, rank: int) -> bool:
        return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE

    # ── Arithmetic ───────────────────────────────────────────────────────

    def offset(self, dfile: int, drank: int) -> Position | None:
        """Shift by an arbitrary delta, or ``None`` if that leaves the board."""
        file, rank = self.file + dfile, self.rank + drank
        if not Position.is_valid(file, rank):
            return None
        return Position(file, rank)

    def step(self, direction: Direction) -> Position | None:
        """Non-raising :meth:`move`."""
        dfile, drank = DIRECTION_DELTAS[direction]
        return self.offset(dfile, drank)

    def move(self, direction: Direction) -> Position:
        """Neighbouring square in *direction*.

        Raises:
            OffBoardError: the neighbour would be outside the board.
        """
        target = self.step(direction)
        if target is None:
            raise OffBoardError(f"Cannot move {direction.name} from {self}")
        return target

    # ── Notation ─────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return _FILES[self.file] + _RANKS[self.rank]

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, name: str) -> Position:
        """Parse a square name, e.g. ``'e4'``."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise OffBoardError(f"Invalid square name: {name!r}")
        return cls(_FILES.index(name[0]), _RANKS.index(name[1]))


def all_positions() -> list[Position]:
    """All 64 squares in a1, b1, ..., h8 order."""
    return [Position(f, r) for r in range(BOARD_SIZE) for f in range(BOARD_SIZE)]
