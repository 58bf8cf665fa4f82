"""Tests for AppContext wiring between session, controller and callbacks."""

from __future__ import annotations

from chessmaster.analysis.controller import ControllerState
from chessmaster.analysis.models import Snapshot
from chessmaster.config import AppSettings
from chessmaster.context import AppContext
from chessmaster.core.position import STARTING_FEN, Position
from chessmaster.engine.session import EngineSession, EngineState
from chessmaster.ui.board.overlay import OverlayRenderer


class _NullSurface:
    def clear(self) -> None:
        pass

    def draw_shaft(self, start, end, color, width) -> None:
        pass

    def fill_polygon(self, points, color) -> None:
        pass


def _context() -> tuple[AppContext, list[Snapshot], list[str | None]]:
    snapshots: list[Snapshot] = []
    finished: list[str | None] = []
    ctx = AppContext.create(
        AppSettings(engine_path="stockfish", multipv=2, depth=7),
        overlay=OverlayRenderer(_NullSurface()),
        on_snapshot=snapshots.append,
        on_search_finished=lambda _snap, move: finished.append(move),
    )
    return ctx, snapshots, finished


def test_create_builds_unstarted_session_from_settings() -> None:
    ctx, _, _ = _context()
    assert isinstance(ctx.session, EngineSession)
    assert ctx.session.state is EngineState.UNINITIALIZED
    assert ctx.controller.parameters.multipv == 2
    assert ctx.controller.parameters.depth == 7


def test_ready_signal_starts_pending_search() -> None:
    ctx, _, _ = _context()
    ctx.controller.set_position(Position.from_fen(STARTING_FEN))
    assert ctx.controller.state is ControllerState.AWAITING_READY

    ctx.session.ready.emit()
    assert ctx.controller.state is ControllerState.SEARCHING


def test_engine_lines_reach_controller() -> None:
    ctx, snapshots, finished = _context()
    ctx.controller.set_position(Position.from_fen(STARTING_FEN))
    ctx.session.ready.emit()

    ctx.session.line_received.emit("info depth 7 multipv 1 score cp 22 pv e2e4 e7e5")
    ctx.session.line_received.emit("bestmove e2e4")

    assert snapshots[-1][0].best_move == "e2e4"
    assert [line.best_move for line in ctx.aggregator.current_snapshot()] == ["e2e4"]
    assert finished == ["e2e4"]


def test_engine_error_parks_live_position_until_ready() -> None:
    ctx, snapshots, _ = _context()
    ctx.controller.set_position(Position.from_fen(STARTING_FEN))
    ctx.session.ready.emit()

    ctx.session.error_occurred.emit("Engine crashed unexpectedly")

    assert ctx.controller.state is ControllerState.AWAITING_READY
    assert snapshots[-1] == ()

    ctx.session.ready.emit()
    assert ctx.controller.state is ControllerState.SEARCHING


def test_explicit_session_is_used() -> None:
    session = EngineSession("custom-engine")
    ctx = AppContext.create(
        AppSettings(),
        overlay=OverlayRenderer(_NullSurface()),
        on_snapshot=lambda _snap: None,
        on_search_finished=lambda _snap, _move: None,
        session=session,
    )
    assert ctx.session is session
