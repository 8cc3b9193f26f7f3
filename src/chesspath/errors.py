"""Exception hierarchy shared by the core and configuration layers."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by chesspath."""


class OffBoardError(ChessError, ValueError):
    """A coordinate outside the 8x8 grid was produced or requested."""


class IllegalMoveError(ChessError, ValueError):
    """A board mutation was requested that the board state does not allow."""


class ConfigError(ChessError, ValueError):
    """Malformed, missing or mistyped configuration data."""


class LayoutError(ConfigError):
    """A board layout document could not be turned into a board."""
