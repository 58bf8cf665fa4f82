"""Search orchestration: when to (re)start the engine and which output to trust."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from chessmaster.analysis.parser import parse_bestmove
from chessmaster.engine import uci
from chessmaster.engine.uci import SearchParameters

if TYPE_CHECKING:
    from chessmaster.analysis.aggregator import AnalysisAggregator
    from chessmaster.analysis.models import Snapshot
    from chessmaster.core.position import Position

_LOGGER = logging.getLogger(__name__)


class CommandSink(Protocol):
    """Minimal engine interface used by :class:`AnalysisController`."""

    @property
    def is_ready(self) -> bool: ...

    def send(self, command: str) -> object: ...


class ControllerState(Enum):
    IDLE = "idle"
    AWAITING_READY = "awaiting_ready"
    SEARCHING = "searching"


class AnalysisController:
    """Generation-stamped search state machine.

    Every (re)search bumps the generation, clears the aggregator and sends
    the full ``stop``/options/``position``/``go`` sequence.  Output of a
    superseded search keeps arriving until the engine emits its trailing
    ``bestmove``; such lines are stamped with their own generation and
    discarded before they can reach the aggregator.
    """

    __slots__ = (
        "__weakref__",
        "_engine",
        "_aggregator",
        "_on_snapshot",
        "_on_search_finished",
        "_state",
        "_generation",
        "_position",
        "_params",
        "_in_flight",
    )

    def __init__(
        self,
        *,
        engine: CommandSink,
        aggregator: AnalysisAggregator,
        on_snapshot: Callable[[Snapshot], None],
        on_search_finished: Callable[[Snapshot, str | None], None],
        params: SearchParameters | None = None,
    ) -> None:
        self._engine = engine
        self._aggregator = aggregator
        self._on_snapshot = on_snapshot
        self._on_search_finished = on_search_finished

        self._state = ControllerState.IDLE
        self._generation = 0
        self._position: Position | None = None
        self._params = params or SearchParameters()
        # Generations of every issued ``go`` not yet answered by ``bestmove``.
        self._in_flight: deque[int] = deque()

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def parameters(self) -> SearchParameters:
        return self._params

    @property
    def position(self) -> Position | None:
        return self._position

    # ── Triggers ─────────────────────────────────────────────────────────

    def set_position(self, position: Position) -> None:
        """React to a new position from the rules collaborator."""
        self._position = position
        if position.is_terminal:
            self._go_idle()
            return
        self._request_search()

    def set_parameters(self, params: SearchParameters) -> None:
        """Apply new search parameters, restarting any live analysis."""
        self._params = params
        if self._position is not None and not self._position.is_terminal:
            self._request_search()

    def stop(self) -> None:
        """Explicit stop: no search runs until the next trigger."""
        self._go_idle()

    def engine_ready(self) -> None:
        """Start the remembered position once the engine finished loading."""
        if self._state is ControllerState.AWAITING_READY:
            self._restart()

    def engine_failed(self, message: str) -> None:
        """Forget outstanding searches; a live position waits for a retried engine."""
        _LOGGER.warning("analysis_stopped: engine failed: %s", message)
        self._in_flight.clear()
        self._begin_generation()
        if self._position is not None and not self._position.is_terminal:
            self._state = ControllerState.AWAITING_READY
        else:
            self._state = ControllerState.IDLE

    # ── Engine output ────────────────────────────────────────────────────

    def handle_engine_line(self, line: str) -> None:
        """Stamp *line* with the generation it belongs to and forward it."""
        if not self._in_flight:
            return
        generation = self._in_flight[0]
        if parse_bestmove(line) is not None:
            self._in_flight.popleft()
        self.accept_line(line, generation)

    def accept_line(self, line: str, generation: int) -> bool:
        """Forward a stamped line unless it belongs to a superseded search."""
        if (
            generation != self._generation
            or self._state is not ControllerState.SEARCHING
            or self._position is None
        ):
            _LOGGER.debug(
                "stale_line_dropped: gen=%d current=%d", generation, self._generation
            )
            return False

        best = parse_bestmove(line)
        if best is not None:
            _LOGGER.debug("search_finished: gen=%d best=%s", generation, best.move)
            self._on_search_finished(self._aggregator.current_snapshot(), best.move)
            return True

        if not self._aggregator.ingest(line, self._position.side_to_move, generation):
            return False
        self._on_snapshot(self._aggregator.current_snapshot())
        return True

    # ── Internals ────────────────────────────────────────────────────────

    def _request_search(self) -> None:
        if not self._engine.is_ready:
            self._state = ControllerState.AWAITING_READY
            return
        self._restart()

    def _restart(self) -> None:
        position = self._position
        if position is None or position.is_terminal:
            return
        self._begin_generation()
        for command in uci.search_commands(position.fen, self._params):
            self._engine.send(command)
        self._in_flight.append(self._generation)
        self._state = ControllerState.SEARCHING
        _LOGGER.debug(
            "search_started: gen=%d depth=%d multipv=%d elo=%d",
            self._generation,
            self._params.depth,
            self._params.multipv,
            self._params.elo,
        )

    def _go_idle(self) -> None:
        if self._engine.is_ready:
            self._engine.send(uci.STOP)
        self._begin_generation()
        self._state = ControllerState.IDLE

    def _begin_generation(self) -> None:
        self._generation += 1
        self._aggregator.reset()
        self._on_snapshot(self._aggregator.current_snapshot())
