"""BoardScene — QGraphicsScene that draws the chessboard, pieces and arrows."""

from __future__ import annotations

from typing import TYPE_CHECKING

import chess
from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chessmaster.core.types import Square, file_of, make_square, rank_of
from chessmaster.ui.board.arrow_layer import ArrowLayer
from chessmaster.ui.board.overlay import OverlayRenderer
from chessmaster.ui.styles.theme import ArrowTheme, BoardTheme

if TYPE_CHECKING:
    from chessmaster.analysis.models import Snapshot


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, pieces and engine arrows.

    Signals:
        move_made(chess.Move): Emitted when a user completes a legal move by
            clicking the origin and then the destination square.
    """

    move_made = pyqtSignal(object)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._board: chess.Board | None = None
        self._flipped = False
        self._interactive = True

        self._selected_sq: Square | None = None

        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsRectItem] = []
        self._last_move_highlights: list[QGraphicsRectItem] = []
        self._piece_items: dict[Square, QGraphicsSimpleTextItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._arrow_layer = ArrowLayer(self)
        self._overlay = OverlayRenderer(self._arrow_layer, ArrowTheme.default())

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def overlay(self) -> OverlayRenderer:
        return self._overlay

    @property
    def arrow_layer(self) -> ArrowLayer:
        return self._arrow_layer

    @property
    def board_px(self) -> float:
        """Side length of the board in scene pixels."""
        return float(8 * self.TILE)

    def set_board(self, board: chess.Board) -> None:
        """Update the displayed position (full redraw of pieces)."""
        self._board = board
        self._clear_selection()
        self._sync_pieces()
        self.highlight_last_move(board.peek() if board.move_stack else None)

    def set_interactive(self, interactive: bool) -> None:
        """Enable / disable piece interaction."""
        self._interactive = interactive
        if not interactive:
            self._clear_selection()

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation and redraw the arrows to match."""
        self._flipped = flipped
        self._draw_board()
        self._sync_pieces()
        if self._board is not None:
            self.highlight_last_move(
                self._board.peek() if self._board.move_stack else None
            )
        self.redraw_arrows()

    def is_flipped(self) -> bool:
        """Return whether the board is currently flipped."""
        return self._flipped

    def show_analysis(self, snapshot: Snapshot) -> None:
        """Draw arrows for an accepted analysis snapshot."""
        self._overlay.show(snapshot, flipped=self._flipped, board_px=self.board_px)

    def redraw_arrows(self) -> None:
        self._overlay.redraw(flipped=self._flipped, board_px=self.board_px)

    def clear_arrows(self) -> None:
        self._overlay.clear()

    def highlight_last_move(self, move: chess.Move | None) -> None:
        """Highlight origin/destination of the last played move."""
        self._clear_items(self._last_move_highlights)
        if move is None:
            return
        for sq in (move.from_square, move.to_square):
            rect = self._make_highlight(sq, self._theme.highlight_from)
            rect.setZValue(0.5)
            self._last_move_highlights.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        self._clear_items(self._coord_items)

        t = self.TILE
        font = QFont("Adwaita Sans", max(9, t // 8))

        for sq in range(64):
            f, r = file_of(sq), rank_of(sq)
            vf, vr = self._visual_coords(f, r)
            is_dark = (f + r) % 2 == 0
            color = self._theme.dark_square if is_dark else self._theme.light_square
            rect = QGraphicsRectItem(vf * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[sq] = rect

            text_color = self._theme.coord_dark if is_dark else self._theme.coord_light
            if vf == 0:
                self._add_coord(str(r + 1), vf * t + 2, vr * t + 1, font, text_color)
            if vr == 7:
                self._add_coord(
                    chr(ord("a") + f), vf * t + t - 12, vr * t + t - 16, font, text_color
                )

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    def _add_coord(
        self, label: str, x: float, y: float, font: QFont, color: QColor
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece glyphs from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._board is None:
            return

        t = self.TILE
        font = QFont("DejaVu Sans", int(t * 0.6))
        for sq, piece in self._board.piece_map().items():
            # Filled glyphs for both sides, coloured by brush.
            glyph = chess.UNICODE_PIECE_SYMBOLS[piece.symbol().lower()]
            item = QGraphicsSimpleTextItem(glyph)
            item.setFont(font)
            is_white = piece.color == chess.WHITE
            item.setBrush(
                QBrush(self._theme.piece_white if is_white else self._theme.piece_black)
            )
            item.setPen(QPen(self._theme.piece_black if is_white else QColor(0, 0, 0, 0)))
            vf, vr = self._visual_coords(file_of(sq), rank_of(sq))
            bounds = item.boundingRect()
            item.setPos(
                vf * t + (t - bounds.width()) / 2,
                vr * t + (t - bounds.height()) / 2,
            )
            item.setZValue(1)
            self.addItem(item)
            self._piece_items[sq] = item

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._board is None or event is None:
            return super().mousePressEvent(event)

        if self._handle_click(self._pos_to_square(event.scenePos())):
            return
        super().mousePressEvent(event)

    def _handle_click(self, sq: Square | None) -> bool:
        """Select a piece or complete a move; return True if a move was made."""
        if sq is None or self._board is None or not self._interactive:
            self._clear_selection()
            return False

        if self._selected_sq is not None:
            move = self._find_legal_move(self._selected_sq, sq)
            if move is not None:
                self._clear_selection()
                self.move_made.emit(move)
                return True

        piece = self._board.piece_at(sq)
        if piece is not None and piece.color == self._board.turn:
            self._select_square(sq)
        else:
            self._clear_selection()
        return False

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, sq: Square) -> None:
        self._clear_selection()
        self._selected_sq = sq
        self._highlight_items.append(
            self._make_highlight(sq, self._theme.highlight_from)
        )
        if self._board is None:
            return
        for move in self._board.legal_moves:
            if move.from_square == sq:
                self._highlight_items.append(
                    self._make_highlight(move.to_square, self._theme.highlight_to)
                )

    def _clear_selection(self) -> None:
        self._selected_sq = None
        self._clear_items(self._highlight_items)

    def _clear_items(self, items: list) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Move resolution ──────────────────────────────────────────────────

    def _find_legal_move(self, from_sq: Square, to_sq: Square) -> chess.Move | None:
        """Find the legal move from *from_sq* to *to_sq*; promotions become queens."""
        if self._board is None:
            return None
        for promotion in (None, chess.QUEEN):
            move = chess.Move(from_sq, to_sq, promotion=promotion)
            if self._board.is_legal(move):
                return move
        return None

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, file: int, rank: int) -> tuple[int, int]:
        """Convert board file/rank to visual column/row."""
        if self._flipped:
            return 7 - file, rank
        return file, 7 - rank

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        """Scene position → board square."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        if self._flipped:
            f, r = 7 - col, row
        else:
            f, r = col, 7 - row
        return make_square(f, r)

    def _make_highlight(self, sq: Square, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vf, vr = self._visual_coords(file_of(sq), rank_of(sq))
        rect = QGraphicsRectItem(vf * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
