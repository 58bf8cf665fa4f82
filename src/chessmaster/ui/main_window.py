"""MainWindow — top-level window assembling board, analysis and controls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import chess
import chess.pgn
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QFont, QGuiApplication
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from chessmaster.config import AppSettings
from chessmaster.context import AppContext
from chessmaster.core.position import Position
from chessmaster.engine.session import EngineLoadError
from chessmaster.engine.uci import SearchParameters
from chessmaster.ui.board.board_view import BoardView
from chessmaster.ui.panels.analysis_panel import AnalysisPanel
from chessmaster.ui.panels.control_panel import ControlPanel

if TYPE_CHECKING:
    from chessmaster.analysis.models import Snapshot
    from chessmaster.engine.session import EngineSession

_LOGGER = logging.getLogger(__name__)


def game_over_text(board: chess.Board) -> tuple[str, str] | None:
    """Headline and reason for a finished game, ``None`` while it goes on."""
    if board.is_checkmate():
        winner = "Black" if board.turn == chess.WHITE else "White"
        return "CHECKMATE!", f"{winner} wins."
    if board.is_game_over():
        return "DRAW!", "Game drawn."
    return None


def pgn_text(board: chess.Board) -> str:
    """Movetext of the game played on *board* (no headers)."""
    game = chess.pgn.Game.from_board(board)
    exporter = chess.pgn.StringExporter(headers=False, variations=False, comments=False)
    return game.accept(exporter)


class MainWindow(QMainWindow):
    """Main application window for Chessmaster."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        session: EngineSession | None = None,
        autostart_engine: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Chessmaster")
        self.setMinimumSize(900, 640)
        self.resize(1100, 750)

        self._settings = settings or AppSettings.from_env()
        self._board = chess.Board()

        self._setup_ui()
        self._context = AppContext.create(
            self._settings,
            overlay=self._board_view.board_scene.overlay,
            on_snapshot=self._on_snapshot,
            on_search_finished=self._on_search_finished,
            session=session,
            parent=self,
        )
        self._connect_signals()
        self._sync_game()

        if autostart_engine:
            self.start_engine()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        self._board_view = BoardView()
        root.addWidget(self._board_view, stretch=3)

        right = QVBoxLayout()
        right.setSpacing(6)

        self._game_over = QLabel()
        self._game_over.setFont(QFont("Adwaita Sans", 14, QFont.Weight.Bold))
        self._game_over.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._game_over.setStyleSheet("color: #ffeb3b;")
        self._game_over.setVisible(False)
        right.addWidget(self._game_over)

        self._analysis_panel = AnalysisPanel()
        right.addWidget(self._analysis_panel, stretch=1)

        self._control_panel = ControlPanel(self._settings.search_parameters())
        right.addWidget(self._control_panel)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(300)
        root.addWidget(right_widget)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel("Game start")
        self._status.addWidget(self._status_label)

    def _connect_signals(self) -> None:
        session = self._context.session
        session.state_changed.connect(self._analysis_panel.set_engine_state)
        session.error_occurred.connect(self._on_engine_error)

        self._board_view.move_made.connect(self._on_move_made)
        self._control_panel.new_game_clicked.connect(self._on_new_game)
        self._control_panel.undo_clicked.connect(self._on_undo)
        self._control_panel.flip_clicked.connect(self._on_flip)
        self._control_panel.copy_pgn_clicked.connect(self._on_copy_pgn)
        self._control_panel.parameters_changed.connect(self._on_parameters_changed)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def context(self) -> AppContext:
        return self._context

    @property
    def board(self) -> chess.Board:
        return self._board

    def start_engine(self) -> bool:
        """Launch the engine; failure leaves manual play fully usable."""
        try:
            self._context.session.start()
        except EngineLoadError as exc:
            self._on_engine_error(str(exc))
            return False
        return True

    # ── Engine callbacks ─────────────────────────────────────────────────

    def _on_snapshot(self, snapshot: Snapshot) -> None:
        self._analysis_panel.set_snapshot(snapshot)
        self._board_view.board_scene.show_analysis(snapshot)

    def _on_search_finished(self, snapshot: Snapshot, best_move: str | None) -> None:
        self._board_view.board_scene.show_analysis(snapshot)
        if best_move is not None:
            self._set_status(f"Best move: {best_move}")

    def _on_engine_error(self, message: str) -> None:
        self._set_status(f"Engine error: {message}")

    # ── Game actions ─────────────────────────────────────────────────────

    def _on_move_made(self, move: chess.Move) -> None:
        if self._board.is_game_over():
            _LOGGER.debug("move_after_game_over_ignored: %s", move.uci())
            return
        if not self._board.is_legal(move):
            _LOGGER.warning("illegal_move_ignored: %s", move.uci())
            return
        self._board.push(move)
        self._sync_game()

    def _on_new_game(self) -> None:
        self._board.reset()
        self._sync_game()

    def _on_undo(self) -> None:
        if not self._board.move_stack:
            return
        self._board.pop()
        self._sync_game()

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())

    def _on_copy_pgn(self) -> None:
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            return
        clipboard.setText(pgn_text(self._board))
        self._control_panel.show_copied()

    def _on_parameters_changed(self, params: SearchParameters) -> None:
        self._context.controller.set_parameters(params)

    def _sync_game(self) -> None:
        """Push the current board to the scene, banner and analysis."""
        scene = self._board_view.board_scene
        scene.set_board(self._board)
        scene.set_interactive(not self._board.is_game_over())
        scene.clear_arrows()
        self._control_panel.set_undo_enabled(bool(self._board.move_stack))

        over = game_over_text(self._board)
        self._game_over.setVisible(over is not None)
        if over is not None:
            headline, reason = over
            self._game_over.setText(f"{headline}\n{reason}")
            self._set_status(reason)
        else:
            self._set_status(
                pgn_text(self._board) if self._board.move_stack else "Game start"
            )

        self._context.controller.set_position(Position.from_board(self._board))

    def _set_status(self, text: str) -> None:
        self._status_label.setText(text)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._context.session.shutdown()
        super().closeEvent(event)
