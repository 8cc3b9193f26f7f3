"""Piece family and trajectory/capture computation."""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, NamedTuple

from chesspath.core.enums import (
    ALL_DIRECTIONS,
    DIAGONALS,
    DIRECTION_DELTAS,
    ORTHOGONALS,
    Direction,
    PieceKind,
    Suit,
)
from chesspath.core.position import Position

if TYPE_CHECKING:
    from chesspath.core.board import Board

_LOGGER = logging.getLogger(__name__)

_UNICODE: dict[tuple[Suit, PieceKind], str] = {
    (Suit.WHITE, PieceKind.PAWN): "♙",
    (Suit.WHITE, PieceKind.KNIGHT): "♘",
    (Suit.WHITE, PieceKind.BISHOP): "♗",
    (Suit.WHITE, PieceKind.ROOK): "♖",
    (Suit.WHITE, PieceKind.QUEEN): "♕",
    (Suit.WHITE, PieceKind.KING): "♔",
    (Suit.BLACK, PieceKind.PAWN): "♟",
    (Suit.BLACK, PieceKind.KNIGHT): "♞",
    (Suit.BLACK, PieceKind.BISHOP): "♝",
    (Suit.BLACK, PieceKind.ROOK): "♜",
    (Suit.BLACK, PieceKind.QUEEN): "♛",
    (Suit.BLACK, PieceKind.KING): "♚",
}


class TrajectoryResult(NamedTuple):
    """Squares a piece can reach, split into quiet moves and captures.

    A snapshot of the board at computation time; recompute after every move.
    """

    trajectory: frozenset[Position]
    capturing: frozenset[Position]

    @classmethod
    def empty(cls) -> TrajectoryResult:
        return cls(frozenset(), frozenset())


class Piece(ABC):
    """A piece standing on (or captured from) a :class:`Board`.

    The board reference is a weak reference: boards own occupancy, not
    lifetime.  ``position`` is only changed by :meth:`Board.move_piece`.
    """

    kind: ClassVar[PieceKind]

    __slots__ = ("suit", "_position", "_captured", "_board_ref", "__weakref__")

    def __init__(
        self,
        suit: Suit,
        position: Position,
        board: Board | None = None,
    ) -> None:
        self.suit = suit
        self._position = position
        self._captured = False
        self._board_ref: weakref.ReferenceType[Board] | None = None
        if board is not None:
            board.place(self)

    # ── Query surface ────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def is_captured(self) -> bool:
        return self._captured

    @property
    def board(self) -> Board:
        """The board this piece was placed on.

        Raises:
            RuntimeError: the piece was never placed, or its board is gone.
        """
        board = self._board_ref() if self._board_ref is not None else None
        if board is None:
            raise RuntimeError(f"{self!r} is not attached to a live board")
        return board

    @property
    def is_attached(self) -> bool:
        return self._board_ref is not None and self._board_ref() is not None

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.suit, self.kind)]

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = self.kind.letter
        return letter if self.suit == Suit.WHITE else letter.lower()

    def __repr__(self) -> str:
        state = "captured" if self._captured else str(self._position)
        return f"<{type(self).__name__} {self.suit!s}@{state}>"

    # ── Trajectory ───────────────────────────────────────────────────────

    def calc_trajectory(self) -> TrajectoryResult:
        """Compute quiet-move and capture squares for the current board."""
        _LOGGER.debug(
            "%s@%s -> calc_trajectory()", type(self).__name__, self._position
        )
        if self._captured:
            return TrajectoryResult.empty()
        board = self.board
        trajectory: set[Position] = set()
        capturing: set[Position] = set()
        self._collect(board, trajectory, capturing)
        return TrajectoryResult(frozenset(trajectory), frozenset(capturing))

    def can_reach(self, target: Position) -> bool:
        result = self.calc_trajectory()
        return target in result.trajectory or target in result.capturing

    @abstractmethod
    def _collect(
        self, board: Board, trajectory: set[Position], capturing: set[Position]
    ) -> None:
        """Add reachable squares to *trajectory* and *capturing*."""

    def _classify(
        self,
        board: Board,
        target: Position,
        trajectory: set[Position],
        capturing: set[Position],
    ) -> bool:
        """File *target* into the right set; return whether it was empty."""
        occupant = board.occupant_at(target)
        if occupant is None:
            trajectory.add(target)
            return True
        if occupant.suit != self.suit:
            capturing.add(target)
        return False

    # ── Board bookkeeping (called by Board only) ─────────────────────────

    def _attach(self, board: Board) -> None:
        self._board_ref = weakref.ref(board)

    def _detach(self) -> None:
        self._board_ref = None

    def _relocate(self, position: Position) -> None:
        self._position = position

    def _mark_captured(self) -> None:
        self._captured = True


# ── Stepping pieces ─────────────────────────────────────────────────────────


class SteppingPiece(Piece):
    """Piece with a fixed, non-extending list of (Δfile, Δrank) offsets."""

    OFFSETS: ClassVar[tuple[tuple[int, int], ...]] = ()

    __slots__ = ()

    def _collect(
        self, board: Board, trajectory: set[Position], capturing: set[Position]
    ) -> None:
        for dfile, drank in self.OFFSETS:
            target = self._position.offset(dfile, drank)
            if target is not None:
                self._classify(board, target, trajectory, capturing)


class King(SteppingPiece):
    kind = PieceKind.KING
    OFFSETS = tuple(DIRECTION_DELTAS[d] for d in ALL_DIRECTIONS)

    __slots__ = ()


class Knight(SteppingPiece):
    kind = PieceKind.KNIGHT
    OFFSETS = (
        (-2, -1),
        (-2, 1),
        (-1, -2),
        (-1, 2),
        (1, -2),
        (1, 2),
        (2, -1),
        (2, 1),
    )

    __slots__ = ()


# ── Sliding pieces ──────────────────────────────────────────────────────────


class SlidingPiece(Piece):
    """Piece that slides along each direction until blocked or off the board."""

    DIRECTIONS: ClassVar[tuple[Direction, ...]] = ()

    __slots__ = ()

    def _collect(
        self, board: Board, trajectory: set[Position], capturing: set[Position]
    ) -> None:
        for direction in self.DIRECTIONS:
            target = self._position.step(direction)
            while target is not None and self._classify(
                board, target, trajectory, capturing
            ):
                target = target.step(direction)


class Bishop(SlidingPiece):
    kind = PieceKind.BISHOP
    DIRECTIONS = DIAGONALS

    __slots__ = ()


class Rook(SlidingPiece):
    kind = PieceKind.ROOK
    DIRECTIONS = ORTHOGONALS

    __slots__ = ()


class Queen(SlidingPiece):
    kind = PieceKind.QUEEN
    DIRECTIONS = ALL_DIRECTIONS

    __slots__ = ()


# ── Pawn ────────────────────────────────────────────────────────────────────


class Pawn(Piece):
    """Forward-moving pawn; captures only on the forward diagonals.

    En passant and promotion are left to callers.
    """

    kind = PieceKind.PAWN

    _FORWARD: ClassVar[dict[Suit, Direction]] = {
        Suit.WHITE: Direction.NORTH,
        Suit.BLACK: Direction.SOUTH,
    }
    _CAPTURE_DIRS: ClassVar[dict[Suit, tuple[Direction, Direction]]] = {
        Suit.WHITE: (Direction.NORTH_WEST, Direction.NORTH_EAST),
        Suit.BLACK: (Direction.SOUTH_WEST, Direction.SOUTH_EAST),
    }
    _START_RANK: ClassVar[dict[Suit, int]] = {Suit.WHITE: 1, Suit.BLACK: 6}

    __slots__ = ()

    @property
    def forward(self) -> Direction:
        return self._FORWARD[self.suit]

    @property
    def on_start_rank(self) -> bool:
        return self._position.rank == self._START_RANK[self.suit]

    def _collect(
        self, board: Board, trajectory: set[Position], capturing: set[Position]
    ) -> None:
        one = self._position.step(self.forward)
        if one is not None and board.is_empty(one):
            trajectory.add(one)
            if self.on_start_rank:
                two = one.step(self.forward)
                if two is not None and board.is_empty(two):
                    trajectory.add(two)

        for direction in self._CAPTURE_DIRS[self.suit]:
            target = self._position.step(direction)
            if target is not None and board.is_enemy_of(target, self.suit):
                capturing.add(target)


# ── Factory ─────────────────────────────────────────────────────────────────

PIECE_CLASSES: dict[PieceKind, type[Piece]] = {
    PieceKind.PAWN: Pawn,
    PieceKind.KNIGHT: Knight,
    PieceKind.BISHOP: Bishop,
    PieceKind.ROOK: Rook,
    PieceKind.QUEEN: Queen,
    PieceKind.KING: King,
}


def create_piece(
    kind: PieceKind,
    suit: Suit,
    position: Position,
    board: Board | None = None,
) -> Piece:
    """Instantiate the concrete class for *kind*, placing it on *board* if given."""
    return PIECE_CLASSES[kind](suit, position, board)
