"""Candidate-move arrows: pure geometry plus a thin drawing-surface sink."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias

from PyQt6.QtGui import QColor

from chessmaster.core.types import Square, file_of, rank_of, split_move
from chessmaster.ui.styles.theme import ArrowTheme

if TYPE_CHECKING:
    from chessmaster.analysis.models import Snapshot

Point: TypeAlias = tuple[float, float]

HEAD_HALF_ANGLE = math.pi / 6  # 30°


@dataclass(slots=True, frozen=True)
class Arrow:
    """One screen-space arrow, recomputed on every render."""

    start: Point
    end: Point
    rank: int
    color: QColor
    alpha: float

    @property
    def stroke(self) -> QColor:
        """Hue with the rank's alpha applied."""
        color = QColor(self.color)
        color.setAlphaF(self.alpha)
        return color


class DrawingSurface(Protocol):
    """Where arrows end up (a Qt widget in the app, a recorder in tests)."""

    def clear(self) -> None: ...

    def draw_shaft(
        self, start: Point, end: Point, color: QColor, width: float
    ) -> None: ...

    def fill_polygon(self, points: Sequence[Point], color: QColor) -> None: ...


# ── Geometry ─────────────────────────────────────────────────────────────────


def square_center(sq: Square, flipped: bool, board_px: float) -> Point:
    """Pixel centre of *sq*; row 0 is rank 8 unless the board is flipped."""
    col = file_of(sq)
    row = 7 - rank_of(sq)
    if flipped:
        col, row = 7 - col, 7 - row
    cell = board_px / 8
    return col * cell + cell / 2, row * cell + cell / 2


def compute_arrow(move: str, flipped: bool, board_px: float) -> tuple[Point, Point] | None:
    """Map a long-algebraic move to ``(from, to)`` centres, ``None`` if malformed."""
    squares = split_move(move)
    if squares is None:
        return None
    from_sq, to_sq = squares
    return (
        square_center(from_sq, flipped, board_px),
        square_center(to_sq, flipped, board_px),
    )


def arrowhead(
    start: Point,
    end: Point,
    length: float = 20.0,
    half_angle: float = HEAD_HALF_ANGLE,
) -> tuple[Point, Point, Point]:
    """Triangle with its tip at *end*, aligned with the shaft."""
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    left = (
        end[0] - length * math.cos(angle - half_angle),
        end[1] - length * math.sin(angle - half_angle),
    )
    right = (
        end[0] - length * math.cos(angle + half_angle),
        end[1] - length * math.sin(angle + half_angle),
    )
    return end, left, right


def arrow_alpha(rank: int, theme: ArrowTheme) -> float:
    """0.8 for the best line, then 0.2 less per rank, never below zero."""
    return max(0.0, round(theme.top_alpha - theme.alpha_step * rank, 3))


def arrow_hue(rank: int, theme: ArrowTheme) -> QColor:
    return theme.top_hue if rank == 0 else theme.other_hue


def arrow_style(rank: int, theme: ArrowTheme) -> tuple[QColor, float]:
    """Hue and alpha for the arrow of the line ranked *rank* (0 = best)."""
    return arrow_hue(rank, theme), arrow_alpha(rank, theme)


# ── Renderer ─────────────────────────────────────────────────────────────────


class OverlayRenderer:
    """Turns the accepted snapshot into arrows on a :class:`DrawingSurface`.

    The last snapshot passed to :meth:`show` is kept so the overlay can be
    redrawn after a flip or resize without asking the engine again.
    """

    __slots__ = ("_surface", "_theme", "_snapshot")

    def __init__(self, surface: DrawingSurface, theme: ArrowTheme | None = None) -> None:
        self._surface = surface
        self._theme = theme or ArrowTheme.default()
        self._snapshot: Snapshot = ()

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def build_arrows(
        self, snapshot: Snapshot, *, flipped: bool, board_px: float
    ) -> list[Arrow]:
        arrows: list[Arrow] = []
        for rank, info in enumerate(snapshot):
            ends = compute_arrow(info.best_move, flipped, board_px)
            if ends is None:
                continue
            color, alpha = arrow_style(rank, self._theme)
            arrows.append(
                Arrow(
                    start=ends[0],
                    end=ends[1],
                    rank=rank,
                    color=color,
                    alpha=alpha,
                )
            )
        return arrows

    def render(self, arrows: Iterable[Arrow]) -> None:
        """Clear the surface, then draw *arrows* in rank order."""
        self._surface.clear()
        for arrow in sorted(arrows, key=lambda a: a.rank):
            stroke = arrow.stroke
            self._surface.draw_shaft(
                arrow.start, arrow.end, stroke, self._theme.shaft_width
            )
            self._surface.fill_polygon(
                arrowhead(arrow.start, arrow.end, self._theme.head_length), stroke
            )

    def show(self, snapshot: Snapshot, *, flipped: bool, board_px: float) -> list[Arrow]:
        """Remember *snapshot* and draw it."""
        self._snapshot = snapshot
        arrows = self.build_arrows(snapshot, flipped=flipped, board_px=board_px)
        self.render(arrows)
        return arrows

    def redraw(self, *, flipped: bool, board_px: float) -> list[Arrow]:
        """Draw the last shown snapshot again for a new orientation or size."""
        return self.show(self._snapshot, flipped=flipped, board_px=board_px)

    def clear(self) -> None:
        self._snapshot = ()
        self._surface.clear()
