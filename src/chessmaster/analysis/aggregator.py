"""Folds streamed engine ``info`` lines into ranked candidate lines."""

from __future__ import annotations

from chessmaster.analysis.models import PV_DISPLAY_PLIES, InfoLine, Score, Snapshot
from chessmaster.analysis.parser import parse_info_line
from chessmaster.core.enums import Color


class AnalysisAggregator:
    """Holds the candidate lines of exactly one search generation.

    Engines re-emit each MultiPV line as the search deepens, so lines are
    upserted by ``pv_index``.  :meth:`reset` must be called whenever a new
    generation begins.
    """

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: dict[int, InfoLine] = {}

    def reset(self) -> None:
        """Drop every held line."""
        self._lines.clear()

    def ingest(self, raw_line: str, side_to_move: Color, generation: int = 0) -> bool:
        """Parse *raw_line* and upsert it; return whether it was recorded."""
        parsed = parse_info_line(raw_line)
        if parsed is None:
            return False

        if parsed.mate is not None:
            score = Score(mate=parsed.mate)
        else:
            cp = parsed.cp or 0
            # Engine scores are side-to-move-centric; store White-positive.
            score = Score(cp=cp if side_to_move == Color.WHITE else -cp)

        self._lines[parsed.pv_index] = InfoLine(
            pv_index=parsed.pv_index,
            score=score,
            line=parsed.moves[:PV_DISPLAY_PLIES],
            generation=generation,
            depth=parsed.depth,
        )
        return True

    def current_snapshot(self) -> Snapshot:
        """Held lines ordered by ascending ``pv_index``."""
        return tuple(self._lines[index] for index in sorted(self._lines))

    def __len__(self) -> int:
        return len(self._lines)
