"""Tests for Board occupancy and move_piece."""

import pytest

from chesspath.core.board import Board
from chesspath.core.enums import PieceKind, Suit
from chesspath.core.piece import Knight, Pawn, Rook
from chesspath.core.position import Position
from chesspath.errors import IllegalMoveError, OffBoardError

E2, E4, D5 = Position.parse("e2"), Position.parse("e4"), Position.parse("d5")


class TestBoardQueries:
    def test_new_board_is_empty(self, board: Board) -> None:
        assert len(board) == 0
        assert board.occupant_at(E4) is None
        assert board.is_empty(E4)

    def test_place_and_get(self, board: Board) -> None:
        pawn = Pawn(Suit.WHITE, E2, board)
        assert board.occupant_at(E2) is pawn
        assert board[E2] is pawn
        assert not board.is_empty(E2)

    def test_suit_predicates(self, board: Board) -> None:
        Pawn(Suit.WHITE, E2, board)
        assert board.is_friendly_to(E2, Suit.WHITE)
        assert board.is_enemy_of(E2, Suit.BLACK)
        assert not board.is_enemy_of(E2, Suit.WHITE)
        assert not board.is_friendly_to(E4, Suit.WHITE)
        assert not board.is_enemy_of(E4, Suit.WHITE)

    @pytest.mark.parametrize("bad", [(4, 3), "e4", 28, None])
    def test_non_position_rejected(self, board: Board, bad: object) -> None:
        with pytest.raises(OffBoardError):
            board.occupant_at(bad)  # type: ignore[arg-type]

    def test_pieces_filters_and_order(self, board: Board, place) -> None:
        place("rook", "black", "h8")
        place("rook", "white", "a1")
        place("knight", "white", "g1")
        place("knight", "black", "b8")
        place("pawn", "white", "e2")

        assert [str(p.position) for p in board.pieces()] == ["a1", "g1", "e2", "b8", "h8"]
        assert {str(p) for p in board.pieces(Suit.WHITE)} == {"R", "N", "P"}
        black_knights = board.pieces(Suit.BLACK, PieceKind.KNIGHT)
        assert [str(p.position) for p in black_knights] == ["b8"]

    def test_repr_diagram(self, board: Board, place) -> None:
        place("rook", "white", "a1")
        place("king", "black", "e8")
        text = repr(board)
        assert text.splitlines()[0] == "8 . . . . k . . ."
        assert text.splitlines()[7] == "1 R . . . . . . ."
        assert "a b c d e f g h" in text


class TestBoardPlace:
    def test_occupied_square_rejected(self, board: Board) -> None:
        Pawn(Suit.WHITE, E2, board)
        with pytest.raises(IllegalMoveError, match="already occupied"):
            Knight(Suit.BLACK, E2, board)

    def test_piece_cannot_join_second_board(self, board: Board) -> None:
        pawn = Pawn(Suit.WHITE, E2, board)
        other = Board()
        with pytest.raises(IllegalMoveError, match="another board"):
            other.place(pawn)
        assert other.is_empty(E2)

    def test_captured_piece_cannot_be_placed(self, board: Board, place) -> None:
        place("rook", "white", "d1")
        victim = place("pawn", "black", "d5")
        board.move_piece(Position.parse("d1"), D5)
        with pytest.raises(IllegalMoveError, match="captured"):
            Board().place(victim)


class TestMovePiece:
    def test_quiet_move(self, board: Board) -> None:
        pawn = Pawn(Suit.WHITE, E2, board)
        assert board.move_piece(E2, E4) is None
        assert board.occupant_at(E4) is pawn
        assert board.occupant_at(E2) is None
        assert pawn.position == E4

    def test_capture(self, board: Board) -> None:
        pawn = Pawn(Suit.WHITE, E4, board)
        victim = Knight(Suit.BLACK, D5, board)

        captured = board.move_piece(E4, D5)

        assert captured is victim
        assert victim.is_captured
        assert board.occupant_at(D5) is pawn
        assert board.occupant_at(E4) is None
        assert all(p is not victim for p in board.pieces())
        assert board.captured == (victim,)
        assert len(board) == 1

    def test_from_empty_raises(self, board: Board) -> None:
        with pytest.raises(IllegalMoveError, match="No piece on e2"):
            board.move_piece(E2, E4)

    def test_friendly_target_raises_and_leaves_state(self, board: Board) -> None:
        rook = Rook(Suit.WHITE, E2, board)
        pawn = Pawn(Suit.WHITE, E4, board)
        with pytest.raises(IllegalMoveError, match="friendly"):
            board.move_piece(E2, E4)
        assert board[E2] is rook and board[E4] is pawn
        assert not pawn.is_captured
        assert rook.position == E2

    def test_null_move_raises(self, board: Board) -> None:
        Rook(Suit.WHITE, E2, board)
        with pytest.raises(IllegalMoveError, match="Null move"):
            board.move_piece(E2, E2)

    def test_listeners_see_final_state(self, board: Board) -> None:
        rook = Rook(Suit.BLACK, D5, board)
        victim = Pawn(Suit.WHITE, Position.parse("d2"), board)
        seen: list[tuple] = []

        def on_move(piece, origin, target, captured) -> None:
            seen.append(("move", piece, origin, target, captured, board[target]))

        def on_capture(captured, capturer) -> None:
            seen.append(("capture", captured, capturer))

        board.events.on_move.append(on_move)
        board.events.on_capture.append(on_capture)
        board.move_piece(D5, Position.parse("d2"))

        assert seen == [
            ("move", rook, D5, Position.parse("d2"), victim, rook),
            ("capture", victim, rook),
        ]

    def test_quiet_move_fires_no_capture_event(self, board: Board) -> None:
        Knight(Suit.WHITE, Position.parse("g1"), board)
        captures: list[object] = []
        board.events.on_capture.append(lambda *args: captures.append(args))
        board.move_piece(Position.parse("g1"), Position.parse("f3"))
        assert captures == []

    def test_clear(self, board: Board, place) -> None:
        rook = place("rook", "white", "a1")
        victim = place("rook", "black", "a8")
        board.move_piece(Position.parse("a1"), Position.parse("a8"))
        board.clear()
        assert len(board) == 0
        assert board.captured == ()
        assert not rook.is_attached
        assert not victim.is_attached

    def test_cleared_piece_no_longer_claims_square(self, board: Board, place) -> None:
        rook = place("rook", "white", "a1")
        board.clear()
        knight = place("knight", "black", "a1")

        assert board[Position.parse("a1")] is knight
        assert not rook.is_attached
        with pytest.raises(RuntimeError, match="not attached"):
            rook.calc_trajectory()

        fresh = Board()
        fresh.place(rook)
        assert rook.board is fresh
        assert len(rook.calc_trajectory().trajectory) == 14
