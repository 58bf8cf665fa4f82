"""Narrow grammar for the engine output lines we consume.

The UCI output vocabulary is much larger than what the analysis overlay
needs.  Only these shapes are a contract::

    info ... multipv <N> ... score cp <C> ... pv <m1> <m2> ...
    info ... multipv <N> ... score mate <M> ... pv <m1> ...
    bestmove <move> [ponder <move>]

``depth`` is picked up when present.  Anything else returns ``None``; no
function here raises on engine input.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessmaster.engine.uci import BEST_MOVE

_SCORE_BOUNDS = frozenset({"lowerbound", "upperbound"})


@dataclass(slots=True, frozen=True)
class ParsedInfo:
    """Raw analysis fields, score still relative to the side to move."""

    pv_index: int
    moves: tuple[str, ...]
    cp: int | None = None
    mate: int | None = None
    depth: int | None = None


@dataclass(slots=True, frozen=True)
class BestMove:
    """A ``bestmove`` line; *move* is ``None`` for ``bestmove (none)``."""

    move: str | None
    ponder: str | None = None


def _to_int(token: str | None) -> int | None:
    if token is None:
        return None
    try:
        return int(token)
    except ValueError:
        return None


def parse_info_line(line: str) -> ParsedInfo | None:
    """Parse a ``multipv``-tagged ``info`` line, or return ``None``."""
    tokens = line.split()
    if not tokens or tokens[0] != "info":
        return None

    pv_index: int | None = None
    has_multipv = False
    depth: int | None = None
    cp: int | None = None
    mate: int | None = None
    moves: tuple[str, ...] = ()

    i = 1
    n = len(tokens)
    while i < n:
        key = tokens[i]
        if key == "string":
            # free text runs to end of line
            break
        if key == "pv":
            moves = tuple(tokens[i + 1 :])
            break
        if key == "multipv":
            has_multipv = True
            pv_index = _to_int(tokens[i + 1] if i + 1 < n else None)
            i += 2
            continue
        if key == "depth":
            depth = _to_int(tokens[i + 1] if i + 1 < n else None)
            i += 2
            continue
        if key == "score":
            kind = tokens[i + 1] if i + 1 < n else None
            value = _to_int(tokens[i + 2] if i + 2 < n else None)
            if kind not in ("cp", "mate") or value is None:
                return None
            if kind == "cp":
                cp = value
            else:
                mate = value
            i += 3
            while i < n and tokens[i] in _SCORE_BOUNDS:
                i += 1
            continue
        i += 1

    if not has_multipv:
        return None
    if pv_index is None or pv_index < 1 or not moves:
        return None
    return ParsedInfo(pv_index=pv_index, moves=moves, cp=cp, mate=mate, depth=depth)


def parse_bestmove(line: str) -> BestMove | None:
    """Parse a ``bestmove`` line, or return ``None`` for any other line."""
    tokens = line.split()
    if not tokens or tokens[0] != BEST_MOVE:
        return None
    move = tokens[1] if len(tokens) > 1 and tokens[1] != "(none)" else None
    ponder = None
    if len(tokens) > 3 and tokens[2] == "ponder":
        ponder = tokens[3]
    return BestMove(move=move, ponder=ponder)
