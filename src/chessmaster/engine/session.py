"""UCI engine process session.

Owns the external engine process and the newline-delimited text channel to
it.  Everything runs on the GUI thread: :class:`QProcess` delivers output
through the Qt event loop, so line handlers never interleave.

Logging:
- Set ``CHESSMASTER_LOGLEVEL=DEBUG`` to trace every command and line.
- Lifecycle events (start, ready, stop, failures) are logged at INFO+.
"""

from __future__ import annotations

import logging
import shutil
from collections import deque
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path

from PyQt6.QtCore import QObject, QProcess, QTimer, pyqtSignal

from chessmaster.engine import uci

_LOGGER = logging.getLogger(__name__)

# Runaway output guard (1 MB without a newline is not a UCI engine).
MAX_BUFFER_SIZE = 1024 * 1024

LineHandler = Callable[[str], None]


class EngineLoadError(Exception):
    """Raised when the engine could not be acquired or started."""


class EngineState(Enum):
    """Lifecycle of an :class:`EngineSession`."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
    TERMINATED = "terminated"


class LineBuffer:
    """Reassembles complete text lines from arbitrary byte chunks."""

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending = b""

    def feed(self, data: bytes) -> list[str]:
        """Append *data* and return every line it completed, in order."""
        self._pending += data
        if len(self._pending) > MAX_BUFFER_SIZE:
            _LOGGER.warning(
                "buffer_overflow: size=%d bytes, dropping partial line",
                len(self._pending),
            )
            self._pending = b""
            return []

        lines: list[str] = []
        while b"\n" in self._pending:
            raw, self._pending = self._pending.split(b"\n", 1)
            lines.append(raw.rstrip(b"\r").decode("utf-8", errors="replace"))
        return lines

    def clear(self) -> None:
        self._pending = b""


def resolve_engine_path(engine_path: str) -> str:
    """Return an absolute path for *engine_path* (file path or PATH lookup)."""
    if not engine_path:
        raise EngineLoadError("No engine executable configured")
    candidate = Path(engine_path).expanduser()
    if candidate.is_file():
        return str(candidate.resolve())
    found = shutil.which(engine_path)
    if found is None:
        raise EngineLoadError(f"Engine executable not found: {engine_path}")
    return found


class EngineSession(QObject):
    """Engine process with an inbound command queue and an outbound line stream.

    Signals:
        ready: The UCI handshake completed; commands are now written directly.
        line_received(str): One complete engine output line.
        error_occurred(str): Loading failed or the process died.
        state_changed(object): New :class:`EngineState`.
    """

    ready = pyqtSignal()
    line_received = pyqtSignal(str)
    error_occurred = pyqtSignal(str)
    state_changed = pyqtSignal(object)

    def __init__(
        self,
        engine_path: str,
        *,
        engine_args: Sequence[str] = (),
        ready_timeout_ms: int = 10_000,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine_path = engine_path
        self._engine_args = list(engine_args)
        self._ready_timeout_ms = ready_timeout_ms

        self._process: QProcess | None = None
        self._buffer = LineBuffer()
        self._queue: deque[str] = deque()
        self._state = EngineState.UNINITIALIZED
        self._last_error: EngineLoadError | None = None

        self._ready_timer = QTimer(self)
        self._ready_timer.setSingleShot(True)
        self._ready_timer.timeout.connect(self._on_ready_timeout)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is EngineState.READY

    @property
    def last_error(self) -> EngineLoadError | None:
        """The error that moved the session to ``FAILED``, if any."""
        return self._last_error

    def start(self) -> None:
        """Launch the engine and begin the UCI handshake.

        Raises :class:`EngineLoadError` when the executable cannot be found.
        Later failures (process won't start, crash or handshake timeout) are
        reported through :attr:`error_occurred`.
        """
        if self._state in (EngineState.LOADING, EngineState.READY):
            return

        try:
            program = resolve_engine_path(self._engine_path)
        except EngineLoadError as exc:
            self._last_error = exc
            self._set_state(EngineState.FAILED)
            _LOGGER.error("engine_start_failed: %s", exc)
            raise

        _LOGGER.info("engine_start: exe=%s", Path(program).name)
        self._last_error = None
        self._buffer.clear()
        self._queue.clear()

        process = QProcess(self)
        process.setProcessChannelMode(QProcess.ProcessChannelMode.SeparateChannels)
        process.started.connect(self._on_started)
        process.readyReadStandardOutput.connect(self._on_stdout_ready)
        process.readyReadStandardError.connect(self._on_stderr_ready)
        process.errorOccurred.connect(self._on_process_error)
        process.finished.connect(self._on_finished)
        self._process = process

        self._set_state(EngineState.LOADING)
        self._ready_timer.start(self._ready_timeout_ms)
        process.start(program, self._engine_args)

    def send(self, command: str) -> None:
        """Write one command line to the engine.

        Commands issued while the handshake is still running are queued and
        flushed in order once the engine is ready.
        """
        if "\n" in command or "\r" in command:
            raise ValueError(f"UCI command must be a single line: {command!r}")
        if self._state is EngineState.READY:
            self._write(command)
        elif self._state is EngineState.LOADING:
            self._queue.append(command)
        else:
            _LOGGER.debug("command_dropped: %s (state=%s)", command, self._state.value)

    def on_line(self, handler: LineHandler) -> None:
        """Invoke *handler* once per complete engine output line."""

        def _deliver(line: str) -> None:
            try:
                handler(line)
            except Exception:
                _LOGGER.exception("line_handler_failed: %r", line)

        self.line_received.connect(_deliver)

    def stop(self) -> None:
        """Ask the engine to conclude the current search (advisory)."""
        self.send(uci.STOP)

    def shutdown(self) -> None:
        """Quit the engine, escalating to terminate/kill if it lingers."""
        self._ready_timer.stop()
        self._queue.clear()
        process = self._process
        self._process = None
        self._set_state(EngineState.TERMINATED)
        if process is None:
            return

        _LOGGER.info("engine_stop: initiating shutdown")
        if process.state() == QProcess.ProcessState.Running:
            process.write(f"{uci.QUIT}\n".encode())
            process.closeWriteChannel()
            if not process.waitForFinished(1000):
                _LOGGER.debug("engine_stop: terminate")
                process.terminate()
                if not process.waitForFinished(1000):
                    _LOGGER.warning("engine_stop: kill (forced)")
                    process.kill()
                    process.waitForFinished(500)
        process.deleteLater()
        self._buffer.clear()
        _LOGGER.info("engine_stop: shutdown complete")

    # ── Process signal handlers ──────────────────────────────────────────

    def _on_started(self) -> None:
        _LOGGER.debug("engine_started: sending handshake")
        for command in uci.handshake_commands():
            self._write(command)

    def _on_stdout_ready(self) -> None:
        if self._process is None:
            return
        data = self._process.readAllStandardOutput().data()
        for line in self._buffer.feed(data):
            self._handle_line(line)

    def _on_stderr_ready(self) -> None:
        if self._process is None:
            return
        data = self._process.readAllStandardError().data()
        text = data.decode("utf-8", errors="replace").strip()
        if text:
            _LOGGER.debug("engine_stderr: %s", text[:200])

    def _on_process_error(self, error: QProcess.ProcessError) -> None:
        messages = {
            QProcess.ProcessError.FailedToStart: (
                f"Failed to start engine: {self._engine_path}"
            ),
            QProcess.ProcessError.Crashed: "Engine crashed unexpectedly",
            QProcess.ProcessError.WriteError: "Failed to write to engine",
            QProcess.ProcessError.ReadError: "Failed to read from engine",
        }
        self._fail(messages.get(error, f"Engine error: {error}"))

    def _on_finished(self, exit_code: int, exit_status: QProcess.ExitStatus) -> None:
        if exit_status == QProcess.ExitStatus.CrashExit:
            self._fail(f"Engine crashed with exit code {exit_code}")
        else:
            self._fail(f"Engine exited with code {exit_code}")

    def _on_ready_timeout(self) -> None:
        self._fail(f"Engine did not answer within {self._ready_timeout_ms} ms")

    # ── Internals ────────────────────────────────────────────────────────

    def _handle_line(self, line: str) -> None:
        _LOGGER.debug("<< %s", line)
        if self._state is EngineState.LOADING and line.strip() == uci.READY_OK:
            self._become_ready()
        self.line_received.emit(line)

    def _become_ready(self) -> None:
        self._ready_timer.stop()
        self._set_state(EngineState.READY)
        self._write(uci.NEW_GAME)
        while self._queue:
            self._write(self._queue.popleft())
        _LOGGER.info("engine_ready: handshake complete")
        self.ready.emit()

    def _write(self, command: str) -> None:
        if self._process is None:
            return
        _LOGGER.debug(">> %s", command)
        self._process.write(f"{command}\n".encode())

    def _fail(self, message: str) -> None:
        if self._state not in (EngineState.LOADING, EngineState.READY):
            return
        self._ready_timer.stop()
        self._queue.clear()
        self._last_error = EngineLoadError(message)
        self._set_state(EngineState.FAILED)
        _LOGGER.error("engine_error: %s", message)

        process = self._process
        self._process = None
        if process is not None:
            process.blockSignals(True)
            if process.state() != QProcess.ProcessState.NotRunning:
                process.kill()
                process.waitForFinished(500)
            process.deleteLater()
        self.error_occurred.emit(message)

    def _set_state(self, state: EngineState) -> None:
        if state is self._state:
            return
        self._state = state
        self.state_changed.emit(state)
