"""Core domain layer — board, pieces and trajectory computation.

Quick start::

    from chesspath.core import Position, standard_board

    board = standard_board()
    knight = board[Position.parse("g1")]
    trajectory, capturing = knight.calc_trajectory()
"""

from chesspath.core.board import Board, BoardEvents
from chesspath.core.enums import (
    ALL_DIRECTIONS,
    DIAGONALS,
    DIRECTION_DELTAS,
    ORTHOGONALS,
    Direction,
    PieceKind,
    Suit,
)
from chesspath.core.layout import board_from_layout, load_layout, standard_board
from chesspath.core.piece import (
    PIECE_CLASSES,
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    Queen,
    Rook,
    SlidingPiece,
    SteppingPiece,
    TrajectoryResult,
    create_piece,
)
from chesspath.core.position import BOARD_SIZE, Position, all_positions

__all__ = [
    # Enums / tables
    "ALL_DIRECTIONS",
    "DIAGONALS",
    "DIRECTION_DELTAS",
    "Direction",
    "ORTHOGONALS",
    "PieceKind",
    "Suit",
    # Coordinates
    "BOARD_SIZE",
    "Position",
    "all_positions",
    # Domain objects
    "Board",
    "BoardEvents",
    "PIECE_CLASSES",
    "Bishop",
    "King",
    "Knight",
    "Pawn",
    "Piece",
    "Queen",
    "Rook",
    "SlidingPiece",
    "SteppingPiece",
    "TrajectoryResult",
    "create_piece",
    # Setup
    "board_from_layout",
    "load_layout",
    "standard_board",
]
