"""Data models produced by engine analysis."""

from __future__ import annotations

from dataclasses import dataclass

# Plies of each principal variation kept for display.
PV_DISPLAY_PLIES = 5


@dataclass(slots=True, frozen=True)
class Score:
    """Engine evaluation in absolute (White-positive) terms.

    Centipawn scores are stored White-positive.  Mate scores keep the
    engine's reported distance and are never mixed with centipawns.
    """

    cp: int = 0
    mate: int | None = None

    @property
    def is_mate(self) -> bool:
        return self.mate is not None

    @property
    def display(self) -> str:
        """Short text such as ``+0.35``, ``-1.20`` or ``M3``."""
        if self.mate is not None:
            return f"M{abs(self.mate)}"
        sign = "+" if self.cp > 0 else ""
        return f"{sign}{self.cp / 100:.2f}"


@dataclass(slots=True, frozen=True)
class InfoLine:
    """One ranked candidate line of the current search."""

    pv_index: int
    score: Score
    line: tuple[str, ...]
    generation: int = 0
    depth: int | None = None

    @property
    def best_move(self) -> str:
        return self.line[0]

    @property
    def line_text(self) -> str:
        return " ".join(self.line)


Snapshot = tuple[InfoLine, ...]


def principal_line(snapshot: Snapshot) -> InfoLine | None:
    """The ``multipv 1`` line of *snapshot*, if present."""
    return next((info for info in snapshot if info.pv_index == 1), None)
