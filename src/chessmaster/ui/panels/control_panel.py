"""ControlPanel — game action buttons and search parameter inputs."""

from __future__ import annotations

from PyQt6.QtCore import QTimer, pyqtBoundSignal, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from chessmaster.config import DEPTH_RANGE, ELO_RANGE, MULTIPV_RANGE
from chessmaster.engine.uci import SearchParameters


class ControlPanel(QWidget):
    """Buttons for game actions plus Elo / depth / MultiPV spin boxes.

    Signals:
        parameters_changed(SearchParameters): Any spin box value changed.
    """

    new_game_clicked = pyqtSignal()
    undo_clicked = pyqtSignal()
    flip_clicked = pyqtSignal()
    copy_pgn_clicked = pyqtSignal()
    parameters_changed = pyqtSignal(object)

    _COPIED_FEEDBACK_MS = 2000

    def __init__(
        self,
        params: SearchParameters | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._setup_ui(params or SearchParameters())

    def _setup_ui(self, params: SearchParameters) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        form = QFormLayout()
        self._elo = self._make_spin(ELO_RANGE, params.elo, step=50)
        self._depth = self._make_spin(DEPTH_RANGE, params.depth)
        self._multipv = self._make_spin(MULTIPV_RANGE, params.multipv)
        form.addRow("Elo", self._elo)
        form.addRow("Depth", self._depth)
        form.addRow("Lines", self._multipv)
        layout.addLayout(form)

        btn_font = QFont("Adwaita Sans", 10)

        row1 = QHBoxLayout()
        self._btn_new = self._make_button("New game", btn_font, self.new_game_clicked)
        row1.addWidget(self._btn_new)
        self._btn_flip = self._make_button("Flip board", btn_font, self.flip_clicked)
        row1.addWidget(self._btn_flip)
        layout.addLayout(row1)

        row2 = QHBoxLayout()
        self._btn_undo = self._make_button("Undo", btn_font, self.undo_clicked)
        row2.addWidget(self._btn_undo)
        self._btn_copy = self._make_button("Copy PGN", btn_font, self.copy_pgn_clicked)
        row2.addWidget(self._btn_copy)
        layout.addLayout(row2)

    def _make_spin(
        self, value_range: tuple[int, int], value: int, *, step: int = 1
    ) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(*value_range)
        spin.setSingleStep(step)
        spin.setValue(value)
        spin.valueChanged.connect(self._emit_parameters)
        return spin

    def _make_button(
        self, text: str, font: QFont, signal: pyqtBoundSignal
    ) -> QPushButton:
        btn = QPushButton(text)
        btn.setFont(font)
        btn.setMinimumHeight(36)
        btn.clicked.connect(signal)
        return btn

    def parameters(self) -> SearchParameters:
        """Current spin box values as search parameters."""
        return SearchParameters(
            elo=self._elo.value(),
            depth=self._depth.value(),
            multipv=self._multipv.value(),
        )

    def show_copied(self) -> None:
        """Briefly confirm a clipboard copy on the button."""
        self._btn_copy.setText("COPIED!")
        QTimer.singleShot(
            self._COPIED_FEEDBACK_MS, lambda: self._btn_copy.setText("Copy PGN")
        )

    def set_undo_enabled(self, enabled: bool) -> None:
        self._btn_undo.setEnabled(enabled)

    def _emit_parameters(self, _value: int) -> None:
        self.parameters_changed.emit(self.parameters())
