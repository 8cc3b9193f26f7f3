"""Helpers for locating runtime asset files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesspath.config.settings import AppSettings
    from chesspath.core.enums import PieceKind, Suit

_LOGGER = logging.getLogger(__name__)

_PACKAGE_ASSETS_DIR = Path(__file__).resolve().parent / "assets"
_REPO_ASSETS_DIR = Path(__file__).resolve().parents[2] / "assets"


def assets_dir() -> Path:
    """Return the root directory for bundled runtime assets."""
    if _PACKAGE_ASSETS_DIR.is_dir():
        return _PACKAGE_ASSETS_DIR
    return _REPO_ASSETS_DIR


def asset_path(*parts: str) -> Path:
    """Build an absolute path inside the bundled assets directory."""
    return assets_dir().joinpath(*parts)


def piece_asset_key(kind: PieceKind, suit: Suit) -> str:
    """Settings key for a piece image, e.g. ``white_knight``."""
    return f"{suit.name.lower()}_{kind.name.lower()}"


def resolve_asset(settings: AppSettings, relative: str | Path) -> Path:
    """Resolve *relative* against the configured assets dir (or the bundled one)."""
    path = Path(relative)
    if path.is_absolute():
        return path
    root = Path(settings.assets_dir) if settings.assets_dir else assets_dir()
    return root / path


def piece_asset_path(settings: AppSettings, kind: PieceKind, suit: Suit) -> Path | None:
    """Image file configured for a piece, or ``None`` if unset or missing."""
    name = settings.piece_assets.get(piece_asset_key(kind, suit))
    if not name:
        return None
    path = resolve_asset(settings, name)
    if not path.is_file():
        _LOGGER.warning("Piece asset not found: %s", path)
        return None
    return path
