"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from chesspath.config.settings import AppSettings, load_settings
from chesspath.core.board import Board
from chesspath.core.layout import load_layout
from chesspath.errors import ConfigError

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication, QMainWindow

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Install the root handler once; later calls only adjust the level."""
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    logging.getLogger().setLevel(level)


def load_game(settings_path: str | Path | None = None) -> tuple[AppSettings, Board]:
    """Read settings and the configured layout; any configuration error aborts."""
    settings = load_settings(settings_path)
    configure_logging(settings.log_level)
    board = load_layout(settings.layout_path())
    return settings, board


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from chesspath.ui.styles.theme import APP_STYLE

    app.setApplicationName("chesspath")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def build_window(settings: AppSettings, board: Board) -> QMainWindow:
    """Main window holding the board view and a status line."""
    from PyQt6.QtWidgets import QMainWindow

    from chesspath.ui.board.board_view import BoardView

    window = QMainWindow()
    window.setWindowTitle("chesspath")
    view = BoardView(settings, window)
    scene = view.board_scene
    scene.set_board(board)
    window.setCentralWidget(view)

    status = window.statusBar()

    def _show_turn(origin: str = "", target: str = "") -> None:
        last = f"  (last: {origin}-{target})" if origin else ""
        status.showMessage(f"{scene.side_to_move.name.capitalize()} to move{last}")

    view.piece_moved.connect(_show_turn)
    _show_turn()
    window.resize(8 * settings.tile_size, 8 * settings.tile_size + 24)
    return window


def run_application(argv: list[str] | None = None) -> int:
    """Create and run the main Qt application.

    ``argv[1]``, when present, is a settings JSON file.
    """
    from PyQt6.QtWidgets import QApplication

    args = sys.argv if argv is None else argv
    settings_path = args[1] if len(args) > 1 else None
    try:
        settings, board = load_game(settings_path)
    except ConfigError as exc:
        configure_logging("INFO")
        _LOGGER.error("Setup failed: %s", exc)
        return 1

    app = QApplication(args)
    _configure_application(app)

    window = build_window(settings, board)
    window.show()

    return app.exec()
