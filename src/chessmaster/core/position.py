"""Immutable position snapshots handed to the analysis pipeline.

The rules themselves live in python-chess; this module only freezes what the
analysis core reads from a :class:`chess.Board`.
"""

from __future__ import annotations

from dataclasses import dataclass

import chess

from chessmaster.core.enums import Color

STARTING_FEN = chess.STARTING_FEN


@dataclass(slots=True, frozen=True)
class Position:
    """Side-to-move-qualified board encoding plus terminal flag."""

    fen: str
    side_to_move: Color
    is_terminal: bool = False

    @classmethod
    def from_board(cls, board: chess.Board) -> Position:
        """Snapshot *board* (FEN, side to move, game-over status)."""
        return cls(
            fen=board.fen(),
            side_to_move=Color.WHITE if board.turn == chess.WHITE else Color.BLACK,
            is_terminal=board.is_game_over(),
        )

    @classmethod
    def from_fen(cls, fen: str) -> Position:
        return cls.from_board(chess.Board(fen))
