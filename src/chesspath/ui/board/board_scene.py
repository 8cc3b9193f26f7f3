"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

import logging
import weakref

from PyQt6 import sip
from PyQt6.QtCore import (
    QAbstractAnimation,
    QEasingCurve,
    QObject,
    QPointF,
    QPropertyAnimation,
    Qt,
    pyqtSignal,
)
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chesspath.config.settings import AppSettings
from chesspath.core.board import Board
from chesspath.core.enums import Suit
from chesspath.core.piece import Piece, TrajectoryResult
from chesspath.core.position import BOARD_SIZE, Position, all_positions
from chesspath.ui.board.piece_item import PieceItem
from chesspath.ui.resources import piece_renderer
from chesspath.ui.styles.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)


class _MoveRelay:
    """Board ``on_move`` listener that forwards to a scene while it is alive.

    Holds the scene weakly and unregisters itself once the scene has been
    garbage-collected or its Qt object deleted.
    """

    __slots__ = ("_board_ref", "_scene_ref")

    def __init__(self, board: Board, scene: BoardScene) -> None:
        self._board_ref = weakref.ref(board)
        self._scene_ref = weakref.ref(scene)

    def __call__(
        self,
        piece: Piece,
        origin: Position,
        target: Position,
        captured: Piece | None,
    ) -> None:
        scene = self._scene_ref()
        if scene is None or sip.isdeleted(scene):
            self.unregister()
            return
        scene._on_board_move(piece, origin, target, captured)

    def unregister(self) -> None:
        board = self._board_ref()
        if board is not None and self in board.events.on_move:
            board.events.on_move.remove(self)


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, trajectory highlights and pieces.

    Signals:
        piece_moved(str, str): origin and destination square names of a move
            the user completed by clicking.
    """

    piece_moved = pyqtSignal(str, str)

    _ANIM_DURATION_MS = 150

    def __init__(
        self, settings: AppSettings | None = None, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._settings = settings if settings is not None else AppSettings()
        self._theme = BoardTheme.named(self._settings.board_theme)
        self._tile = self._settings.tile_size
        self._board: Board | None = None
        self._relay: _MoveRelay | None = None
        self._side_to_move = Suit.WHITE
        self._flipped = False

        # Interaction state
        self._selected: Piece | None = None
        self._reach: TrajectoryResult = TrajectoryResult.empty()
        self._interactive = True
        self._show_coordinates = self._settings.show_coordinates
        self._show_trajectories = self._settings.show_trajectories
        self._animate_moves = self._settings.animate_moves
        self._active_anim: QPropertyAnimation | None = None

        # Visual layers
        self._square_items: dict[Position, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._last_move_highlights: list[QGraphicsRectItem] = []
        self._target_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Position, PieceItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board | None:
        return self._board

    @property
    def side_to_move(self) -> Suit:
        return self._side_to_move

    @property
    def selected(self) -> Piece | None:
        return self._selected

    @property
    def reach(self) -> TrajectoryResult:
        """Trajectory of the selected piece as last highlighted."""
        return self._reach

    def set_board(self, board: Board, side_to_move: Suit = Suit.WHITE) -> None:
        """Display *board* and follow its move notifications."""
        self._unfollow_board()
        self._board = board
        self._side_to_move = side_to_move
        self._relay = _MoveRelay(board, self)
        board.events.on_move.append(self._relay)
        self._clear_selection()
        self._clear_items(self._last_move_highlights)
        self._sync_pieces()

    def detach(self) -> None:
        """Stop following the current board and remove its pieces from view."""
        self._unfollow_board()
        self._board = None
        self._clear_selection()
        self._clear_items(self._last_move_highlights)
        self._sync_pieces()

    def _unfollow_board(self) -> None:
        if self._relay is not None:
            self._relay.unregister()
            self._relay = None

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._clear_selection()
        self._draw_board()
        self._sync_pieces()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self._sync_pieces()

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide rank/file coordinate labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_trajectories(self, visible: bool) -> None:
        """Show or hide trajectory/capture highlights."""
        self._show_trajectories = visible
        if not visible:
            self._clear_items(self._target_items)

    def set_animate_moves(self, enabled: bool) -> None:
        self._animate_moves = enabled

    def apply_settings(self, settings: AppSettings) -> None:
        self._settings = settings
        self.set_theme(BoardTheme.named(settings.board_theme))
        self.set_show_coordinates(settings.show_coordinates)
        self.set_show_trajectories(settings.show_trajectories)
        self.set_animate_moves(settings.animate_moves)

    def select(self, pos: Position) -> bool:
        """Select the side-to-move piece on *pos* and highlight its reach."""
        self._clear_selection()
        if self._board is None:
            return False
        piece = self._board.occupant_at(pos)
        if piece is None or piece.suit != self._side_to_move:
            return False

        self._selected = piece
        self._reach = piece.calc_trajectory()
        self._highlight_items.append(
            self._make_highlight(pos, self._theme.highlight_selected)
        )
        if self._show_trajectories:
            for target in sorted(self._reach.trajectory):
                self._target_items.append(
                    self._make_highlight(target, self._theme.highlight_trajectory)
                )
            for target in sorted(self._reach.capturing):
                self._target_items.append(
                    self._make_highlight(target, self._theme.highlight_capturing)
                )
        return True

    def try_move(self, target: Position) -> bool:
        """Move the selected piece to *target* if it is in the highlighted reach."""
        piece = self._selected
        if self._board is None or piece is None:
            return False
        if target not in self._reach.trajectory and target not in self._reach.capturing:
            return False

        origin = piece.position
        self._clear_selection()
        self._board.move_piece(origin, target)
        self._side_to_move = self._side_to_move.opposite
        self.piece_moved.emit(origin.name, target.name)
        return True

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self._tile
        font = QFont()
        font.setPixelSize(max(9, t // 8))

        for pos in all_positions():
            f, r = pos.file, pos.rank
            vf, vr = self._visual_coords(f, r)
            is_dark = (f + r) % 2 == 0
            color = self._theme.dark_square if is_dark else self._theme.light_square
            rect = QGraphicsRectItem(vf * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[pos] = rect

            text_colour = self._theme.coord_dark if is_dark else self._theme.coord_light
            # Rank numbers (left edge)
            if f == 0:
                self._add_coord(str(r + 1), font, text_colour, vf * t + 2, vr * t + 1)
            # File letters (bottom edge)
            if r == 0:
                self._add_coord(
                    chr(ord("a") + f), font, text_colour, vf * t + t - 12, vr * t + t - 16
                )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord(
        self, label: str, font: QFont, colour: QColor, x: float, y: float
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(colour))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._board is None:
            return

        for piece in self._board.pieces():
            renderer = piece_renderer(self._settings, piece.kind, piece.suit)
            item = PieceItem(piece, self._tile, renderer)
            item.setPos(self._item_pos(piece.position, item))
            self.addItem(item)
            self._piece_items[piece.position] = item

    def _item_pos(self, pos: Position, item: PieceItem) -> QPointF:
        vf, vr = self._visual_coords(pos.file, pos.rank)
        return QPointF(vf * self._tile + item.margin, vr * self._tile + item.margin)

    def _on_board_move(
        self,
        piece: Piece,
        origin: Position,
        target: Position,
        captured: Piece | None,
    ) -> None:
        """Board notification: animate the move; never touches board state."""
        _LOGGER.debug("Animating %r %s -> %s", piece, origin, target)
        self._clear_items(self._last_move_highlights)
        for pos, color in (
            (origin, self._theme.last_move_from),
            (target, self._theme.last_move_to),
        ):
            rect = self._make_highlight(pos, color)
            rect.setZValue(0.5)
            self._last_move_highlights.append(rect)

        # A previous animation still running falls back to an instant sync.
        if self._active_anim is not None:
            self._active_anim.stop()
            self._active_anim = None
            self._sync_pieces()
            return

        item = self._piece_items.get(origin)
        if not self._animate_moves or item is None:
            self._sync_pieces()
            return

        if captured is not None:
            cap = self._piece_items.pop(target, None)
            if cap is not None:
                self.removeItem(cap)

        del self._piece_items[origin]
        self._piece_items[target] = item
        item.setZValue(2)

        anim = QPropertyAnimation(item, b"pos", self)
        anim.setDuration(self._ANIM_DURATION_MS)
        anim.setStartValue(item.pos())
        anim.setEndValue(self._item_pos(target, item))
        anim.setEasingCurve(QEasingCurve.Type.OutCubic)

        def _on_finished() -> None:
            self._active_anim = None
            self._sync_pieces()

        anim.finished.connect(_on_finished)
        self._active_anim = anim
        anim.start(QAbstractAnimation.DeletionPolicy.DeleteWhenStopped)

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._board is None or event is None:
            return super().mousePressEvent(event)

        pos = self._pos_to_square(event.scenePos())
        if pos is None:
            self._clear_selection()
        elif not self.try_move(pos):
            self.select(pos)
        super().mousePressEvent(event)

    # ── Selection / highlights ───────────────────────────────────────────

    def _clear_selection(self) -> None:
        self._selected = None
        self._reach = TrajectoryResult.empty()
        self._clear_items(self._highlight_items)
        self._clear_items(self._target_items)

    def _clear_items(self, items: list[QGraphicsRectItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, file: int, rank: int) -> tuple[int, int]:
        """Convert board file/rank to visual column/row."""
        if self._flipped:
            return 7 - file, rank
        return file, 7 - rank

    def _pos_to_square(self, pos: QPointF) -> Position | None:
        """Scene position → board square."""
        t = self._tile
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
            return None
        if self._flipped:
            return Position(7 - col, row)
        return Position(col, 7 - row)

    def _make_highlight(self, pos: Position, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self._tile
        vf, vr = self._visual_coords(pos.file, pos.rank)
        rect = QGraphicsRectItem(vf * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
