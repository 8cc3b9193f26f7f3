"""Piece rendering helpers for configured SVG assets."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtSvg import QSvgRenderer

from chesspath.config.settings import AppSettings
from chesspath.core.enums import PieceKind, Suit
from chesspath.runtime_assets import piece_asset_path

_LOGGER = logging.getLogger(__name__)

# Cache SVG renderers per file
_renderers: dict[Path, QSvgRenderer] = {}


def piece_renderer(
    settings: AppSettings, kind: PieceKind, suit: Suit
) -> QSvgRenderer | None:
    """Cached SVG renderer for a piece, or ``None`` to fall back to a glyph."""
    path = piece_asset_path(settings, kind, suit)
    if path is None:
        return None
    if path not in _renderers:
        renderer = QSvgRenderer(str(path))
        if not renderer.isValid():
            _LOGGER.warning("Invalid SVG asset: %s", path)
            return None
        _renderers[path] = renderer
    return _renderers[path]
