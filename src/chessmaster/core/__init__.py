"""Core domain layer — colors, squares and position snapshots.

Chess rules are delegated to python-chess; the analysis pipeline only ever
sees the frozen :class:`Position` snapshots built here.

Quick start::

    import chess
    from chessmaster.core import Position

    pos = Position.from_board(chess.Board())
    print(pos.fen, pos.side_to_move)
"""

from chessmaster.core.enums import Color
from chessmaster.core.position import STARTING_FEN, Position
from chessmaster.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    split_move,
    square_name,
)

__all__ = [
    "Color",
    "Position",
    "STARTING_FEN",
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "split_move",
    "square_name",
]
