"""Tests for the QProcess-backed EngineSession."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable

import pytest
from PyQt6.QtTest import QSignalSpy, QTest

from chessmaster.engine.session import EngineLoadError, EngineSession, EngineState


def _wait_until(predicate: Callable[[], bool], timeout_ms: int = 5000) -> bool:
    deadline = time.monotonic() + timeout_ms / 1000
    while not predicate():
        if time.monotonic() > deadline:
            return False
        QTest.qWait(20)
    return True


def _fake_session(args: list[str], **kwargs: object) -> EngineSession:
    return EngineSession(sys.executable, engine_args=args, **kwargs)


class TestEngineSessionOffline:
    def test_missing_executable_raises_and_fails(self) -> None:
        session = EngineSession("/nonexistent/chess-engine")
        states = QSignalSpy(session.state_changed)

        with pytest.raises(EngineLoadError):
            session.start()

        assert session.state is EngineState.FAILED
        assert session.last_error is not None
        assert len(states) == 1

    def test_empty_path_raises(self) -> None:
        with pytest.raises(EngineLoadError):
            EngineSession("").start()

    def test_send_before_start_is_dropped(self) -> None:
        session = EngineSession("stockfish")
        session.send("isready")
        assert not session._queue
        assert session.state is EngineState.UNINITIALIZED

    def test_multiline_command_is_rejected(self) -> None:
        session = EngineSession("stockfish")
        with pytest.raises(ValueError):
            session.send("stop\nquit")

    def test_shutdown_before_start_is_noop(self) -> None:
        session = EngineSession("stockfish")
        session.shutdown()
        assert session.state is EngineState.TERMINATED

    def test_line_handler_errors_are_contained(self) -> None:
        session = EngineSession("stockfish")
        seen: list[str] = []

        def _boom(line: str) -> None:
            seen.append(line)
            raise RuntimeError("handler bug")

        session.on_line(_boom)
        session.line_received.emit("readyok")
        assert seen == ["readyok"]


class TestEngineSessionProcess:
    def test_handshake_flushes_queued_commands(self, fake_engine_args: list[str]) -> None:
        session = _fake_session(fake_engine_args)
        lines: list[str] = []
        session.on_line(lines.append)
        ready = QSignalSpy(session.ready)

        session.start()
        assert session.state is EngineState.LOADING
        session.send("setoption name MultiPV value 2")
        session.send("go depth 1")

        try:
            assert ready.wait(5000)
            assert session.is_ready
            assert "uciok" in lines and "readyok" in lines
            assert _wait_until(lambda: any(line.startswith("bestmove") for line in lines))

            infos = [line for line in lines if " multipv " in line]
            assert len(infos) == 2
            assert lines[-1] == "bestmove e2e4 ponder e7e5"
        finally:
            session.shutdown()

        assert session.state is EngineState.TERMINATED
        session.send("go depth 1")

    def test_start_twice_keeps_one_process(self, fake_engine_args: list[str]) -> None:
        session = _fake_session(fake_engine_args)
        session.start()
        process = session._process
        session.start()
        try:
            assert session._process is process
        finally:
            session.shutdown()

    def test_handshake_timeout_fails(self, fake_engine_args: list[str]) -> None:
        session = _fake_session([*fake_engine_args, "--silent"], ready_timeout_ms=300)
        errors = QSignalSpy(session.error_occurred)

        session.start()
        assert errors.wait(5000)

        assert session.state is EngineState.FAILED
        assert "did not answer" in errors[0][0]
        assert session._process is None

    def test_process_exit_during_handshake_fails(
        self, fake_engine_args: list[str]
    ) -> None:
        session = _fake_session([*fake_engine_args, "--crash"])
        errors = QSignalSpy(session.error_occurred)

        session.start()
        assert errors.wait(5000)

        assert session.state is EngineState.FAILED
        assert isinstance(session.last_error, EngineLoadError)

    def test_failed_session_can_be_restarted(self, fake_engine_args: list[str]) -> None:
        session = _fake_session([*fake_engine_args, "--crash"])
        errors = QSignalSpy(session.error_occurred)
        session.start()
        assert errors.wait(5000)

        session._engine_args = list(fake_engine_args)
        ready = QSignalSpy(session.ready)
        session.start()
        try:
            assert ready.wait(5000)
            assert session.last_error is None
        finally:
            session.shutdown()
