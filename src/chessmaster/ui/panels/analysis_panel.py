"""AnalysisPanel — engine status, evaluation and the ranked candidate lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from chessmaster.analysis.models import principal_line
from chessmaster.engine.session import EngineState

if TYPE_CHECKING:
    from chessmaster.analysis.models import InfoLine, Snapshot

_STATUS_TEXT: dict[EngineState, tuple[str, str]] = {
    EngineState.UNINITIALIZED: ("Offline", "#9e9e9e"),
    EngineState.LOADING: ("Loading...", "#f7c631"),
    EngineState.READY: ("Ready", "#4caf50"),
    EngineState.FAILED: ("Error", "#ef5350"),
    EngineState.TERMINATED: ("Stopped", "#9e9e9e"),
}


class _LineRow(QFrame):
    """One candidate line: ``LINE n``, score, first plies."""

    def __init__(self, info: InfoLine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setStyleSheet(
            "_LineRow { background: #333; border-left: 4px solid #3b6ea5; }"
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(2)

        header = QHBoxLayout()
        self.title = QLabel(f"LINE {info.pv_index}")
        self.title.setFont(QFont("Adwaita Sans", 8, QFont.Weight.Bold))
        self.title.setStyleSheet("color: #8a8a8a;")
        header.addWidget(self.title)
        header.addStretch()

        self.score = QLabel(info.score.display)
        self.score.setFont(QFont("Adwaita Sans", 9, QFont.Weight.Bold))
        self.score.setStyleSheet(
            "color: #ef9a9a;" if info.score.is_mate else "color: #90caf9;"
        )
        header.addWidget(self.score)
        layout.addLayout(header)

        self.moves = QLabel(info.line_text)
        self.moves.setFont(QFont("Adwaita Mono", 9))
        self.moves.setStyleSheet("color: #b0b0b0;")
        layout.addWidget(self.moves)


class AnalysisPanel(QWidget):
    """Engine status, headline evaluation and one row per MultiPV line."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._rows: list[_LineRow] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        status_row = QHBoxLayout()
        caption = QLabel("Engine")
        caption.setStyleSheet("color: #8a8a8a;")
        status_row.addWidget(caption)
        status_row.addStretch()
        self._status = QLabel()
        self._status.setFont(QFont("Adwaita Sans", 10, QFont.Weight.Bold))
        status_row.addWidget(self._status)
        layout.addLayout(status_row)

        self._eval = QLabel("0.00")
        self._eval.setFont(QFont("Adwaita Sans", 22, QFont.Weight.Bold))
        self._eval.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._eval)

        self._mate_warning = QLabel("Forced mate found")
        self._mate_warning.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._mate_warning.setStyleSheet("color: #ef5350; font-weight: bold;")
        self._mate_warning.setVisible(False)
        layout.addWidget(self._mate_warning)

        self._lines_layout = QVBoxLayout()
        self._lines_layout.setSpacing(4)
        layout.addLayout(self._lines_layout)
        layout.addStretch()

        self.set_engine_state(EngineState.UNINITIALIZED)

    @property
    def rows(self) -> tuple[_LineRow, ...]:
        return tuple(self._rows)

    @property
    def status_text(self) -> str:
        return self._status.text()

    @property
    def eval_text(self) -> str:
        return self._eval.text()

    @property
    def mate_warning_visible(self) -> bool:
        return not self._mate_warning.isHidden()

    def set_engine_state(self, state: EngineState) -> None:
        text, color = _STATUS_TEXT[state]
        self._status.setText(text)
        self._status.setStyleSheet(f"color: {color};")

    def set_snapshot(self, snapshot: Snapshot) -> None:
        """Rebuild the line rows; line 1 drives the headline evaluation."""
        for row in self._rows:
            self._lines_layout.removeWidget(row)
            row.deleteLater()
        self._rows.clear()

        for info in snapshot:
            row = _LineRow(info)
            self._lines_layout.addWidget(row)
            self._rows.append(row)

        principal = principal_line(snapshot)
        if principal is None:
            if not snapshot:
                self._eval.setText("0.00")
                self._mate_warning.setVisible(False)
            return
        self._eval.setText(principal.score.display)
        self._mate_warning.setVisible(principal.score.is_mate)
