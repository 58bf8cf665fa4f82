"""Visual theme constants and QSS styles for Chessmaster."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # selected piece origin
    highlight_to: QColor  # legal move targets
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares
    piece_white: QColor
    piece_black: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            highlight_from=QColor(255, 255, 0, 100),  # yellow transparent
            highlight_to=QColor(0, 0, 0, 40),  # dark dot overlay
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
            piece_white=QColor(255, 255, 255),
            piece_black=QColor(20, 20, 20),
        )


@dataclass(frozen=True)
class ArrowTheme:
    """Hues and stroke metrics for candidate-move arrows."""

    top_hue: QColor  # rank 0 (best line)
    other_hue: QColor  # every further line
    shaft_width: float = 10.0
    head_length: float = 20.0
    top_alpha: float = 0.8
    alpha_step: float = 0.2

    @classmethod
    def default(cls) -> ArrowTheme:
        return cls(
            top_hue=QColor(255, 235, 59),  # yellow
            other_hue=QColor(0, 255, 255),  # cyan
        )


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-family: "Adwaita Sans", "Helvetica Neue", sans-serif;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}
QPushButton:disabled {
    color: #666;
    background: #2b2b2b;
}

QSpinBox {
    background: #1e1e1e;
    color: #e0e0e0;
    border: 1px solid #3c3c3c;
    border-radius: 3px;
    padding: 2px 4px;
}
"""
