"""PieceItem — a chess piece on the QGraphicsScene."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QCursor, QFont
from PyQt6.QtSvg import QSvgRenderer
from PyQt6.QtSvgWidgets import QGraphicsSvgItem
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsSimpleTextItem

from chesspath.core.enums import Suit
from chesspath.core.piece import Piece


class PieceItem(QGraphicsSvgItem):
    """A single piece drawn from its SVG asset, or from its Unicode glyph.

    Keeps a reference to the core :class:`Piece`; its square is always
    ``piece.position``.
    """

    _MARGIN_RATIO = 0.03

    def __init__(
        self,
        piece: Piece,
        tile_size: int,
        renderer: QSvgRenderer | None = None,
    ) -> None:
        super().__init__()
        self.piece = piece
        self._tile_size = tile_size
        self._margin = 0.0
        self._glyph: QGraphicsSimpleTextItem | None = None

        if renderer is not None:
            self.setSharedRenderer(renderer)
        else:
            self._glyph = QGraphicsSimpleTextItem(piece.symbol, self)
            colour = QColor(20, 20, 20) if piece.suit == Suit.BLACK else QColor(250, 250, 250)
            self._glyph.setBrush(QBrush(colour))
        self.setTransformOriginPoint(0.0, 0.0)
        self.setCacheMode(QGraphicsItem.CacheMode.NoCache)
        self._update_size(tile_size)

        self.setCursor(QCursor(Qt.CursorShape.PointingHandCursor))
        self.setZValue(1)

    @property
    def uses_glyph(self) -> bool:
        return self._glyph is not None

    @property
    def margin(self) -> float:
        """Inner margin to keep the piece away from tile edges."""
        return self._margin

    def _update_size(self, size: int) -> None:
        self._tile_size = size
        self._margin = float(size) * self._MARGIN_RATIO
        draw_size = max(float(size) - 2.0 * self._margin, 1.0)

        if self._glyph is not None:
            font = QFont()
            font.setPixelSize(max(int(draw_size * 0.8), 1))
            self._glyph.setFont(font)
            bounds = self._glyph.boundingRect()
            self._glyph.setPos(
                (draw_size - bounds.width()) / 2, (draw_size - bounds.height()) / 2
            )
            return

        renderer = self.renderer()
        if renderer is None:
            return
        bounds = self.boundingRect()
        width = float(bounds.width()) or float(renderer.defaultSize().width()) or 1.0
        height = float(bounds.height()) or float(renderer.defaultSize().height()) or 1.0
        scale = min(draw_size / width, draw_size / height)
        self.setScale(scale)
