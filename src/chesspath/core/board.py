"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chesspath.core.enums import PieceKind, Suit
from chesspath.core.position import BOARD_SIZE, Position
from chesspath.errors import IllegalMoveError, OffBoardError

if TYPE_CHECKING:
    from chesspath.core.piece import Piece

_LOGGER = logging.getLogger(__name__)

MoveListener = Callable[["Piece", Position, Position, "Piece | None"], None]
CaptureListener = Callable[["Piece", "Piece"], None]  # captured, capturer


@dataclass
class BoardEvents:
    """Post-move notifications. Listeners must not mutate the board."""

    on_move: list[MoveListener] = field(default_factory=list)
    on_capture: list[CaptureListener] = field(default_factory=list)


def _index(pos: Position) -> int:
    if not isinstance(pos, Position):
        raise OffBoardError(f"Not a board position: {pos!r}")
    return pos.rank * BOARD_SIZE + pos.file


class Board:
    """Mutable 64-square board; the single source of truth for occupancy.

    Not thread-safe: callers sharing one board across threads must
    serialise access to :meth:`move_piece` themselves.
    """

    __slots__ = ("_cells", "_captured", "events", "__weakref__")

    def __init__(self) -> None:
        self._cells: list[Piece | None] = [None] * (BOARD_SIZE * BOARD_SIZE)
        self._captured: list[Piece] = []
        self.events = BoardEvents()

    # -- Element access -----------------------------------------------------

    def occupant_at(self, pos: Position) -> Piece | None:
        return self._cells[_index(pos)]

    def __getitem__(self, pos: Position) -> Piece | None:
        return self.occupant_at(pos)

    def is_empty(self, pos: Position) -> bool:
        return self._cells[_index(pos)] is None

    def is_enemy_of(self, pos: Position, suit: Suit) -> bool:
        occupant = self._cells[_index(pos)]
        return occupant is not None and occupant.suit != suit

    def is_friendly_to(self, pos: Position, suit: Suit) -> bool:
        occupant = self._cells[_index(pos)]
        return occupant is not None and occupant.suit == suit

    # -- Query helpers ------------------------------------------------------

    def pieces(
        self, suit: Suit | None = None, kind: PieceKind | None = None
    ) -> list[Piece]:
        """Active pieces in a1, b1, ..., h8 order, optionally filtered."""
        return [
            p
            for p in self._cells
            if p is not None
            and (suit is None or p.suit == suit)
            and (kind is None or p.kind == kind)
        ]

    @property
    def captured(self) -> tuple[Piece, ...]:
        """Pieces removed from play, in capture order."""
        return tuple(self._captured)

    def __len__(self) -> int:
        return sum(1 for p in self._cells if p is not None)

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece) -> None:
        """Put a new piece on its recorded square (setup only)."""
        idx = _index(piece.position)
        if piece.is_captured:
            raise IllegalMoveError(f"Cannot place captured piece {piece!r}")
        if piece.is_attached and piece.board is not self:
            raise IllegalMoveError(f"{piece!r} already belongs to another board")
        if self._cells[idx] is not None:
            raise IllegalMoveError(
                f"Square {piece.position} is already occupied by {self._cells[idx]!r}"
            )
        piece._attach(self)
        self._cells[idx] = piece

    def move_piece(self, from_pos: Position, to_pos: Position) -> Piece | None:
        """Relocate the occupant of *from_pos* to *to_pos*.

        An enemy on *to_pos* is captured and evicted.  Move legality beyond
        occupancy is the caller's concern (see :meth:`Piece.calc_trajectory`).

        Returns:
            The captured piece, or ``None`` for a quiet move.

        Raises:
            IllegalMoveError: *from_pos* is empty, equals *to_pos*, or
                *to_pos* holds a piece of the same suit.
        """
        from_idx, to_idx = _index(from_pos), _index(to_pos)
        piece = self._cells[from_idx]
        if piece is None:
            raise IllegalMoveError(f"No piece on {from_pos}")
        if from_idx == to_idx:
            raise IllegalMoveError(f"Null move on {from_pos}")

        captured = self._cells[to_idx]
        if captured is not None:
            if captured.suit == piece.suit:
                raise IllegalMoveError(
                    f"{piece!r} cannot move onto friendly {captured!r}"
                )
            captured._mark_captured()
            self._captured.append(captured)

        self._cells[from_idx] = None
        self._cells[to_idx] = piece
        piece._relocate(to_pos)
        _LOGGER.debug("%r moved %s -> %s", piece, from_pos, to_pos)

        for on_move in tuple(self.events.on_move):
            on_move(piece, from_pos, to_pos, captured)
        if captured is not None:
            _LOGGER.debug("%r captured on %s", captured, to_pos)
            for on_capture in tuple(self.events.on_capture):
                on_capture(captured, piece)
        return captured

    def clear(self) -> None:
        """Remove every piece; removed pieces are detached from this board."""
        for piece in self._cells:
            if piece is not None:
                piece._detach()
        for piece in self._captured:
            piece._detach()
        self._cells = [None] * (BOARD_SIZE * BOARD_SIZE)
        self._captured = []

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self._cells[rank * BOARD_SIZE + file]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
