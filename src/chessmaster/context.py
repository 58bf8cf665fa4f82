"""Explicitly wired application context for the analysis pipeline."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessmaster.analysis.aggregator import AnalysisAggregator
from chessmaster.analysis.controller import AnalysisController
from chessmaster.engine.session import EngineSession

if TYPE_CHECKING:
    from PyQt6.QtCore import QObject

    from chessmaster.analysis.models import Snapshot
    from chessmaster.config import AppSettings
    from chessmaster.ui.board.overlay import OverlayRenderer


@dataclass(slots=True)
class AppContext:
    """Engine session, aggregator, controller and renderer, built once."""

    settings: AppSettings
    session: EngineSession
    aggregator: AnalysisAggregator
    controller: AnalysisController
    overlay: OverlayRenderer

    @classmethod
    def create(
        cls,
        settings: AppSettings,
        *,
        overlay: OverlayRenderer,
        on_snapshot: Callable[[Snapshot], None],
        on_search_finished: Callable[[Snapshot, str | None], None],
        session: EngineSession | None = None,
        parent: QObject | None = None,
    ) -> AppContext:
        """Construct and connect every component; the engine is not started."""
        if session is None:
            session = EngineSession(
                settings.engine_path,
                ready_timeout_ms=settings.ready_timeout_ms,
                parent=parent,
            )
        aggregator = AnalysisAggregator()
        controller = AnalysisController(
            engine=session,
            aggregator=aggregator,
            on_snapshot=on_snapshot,
            on_search_finished=on_search_finished,
            params=settings.search_parameters(),
        )
        # The controller is the session's only subscriber.
        session.on_line(controller.handle_engine_line)
        session.ready.connect(controller.engine_ready)
        session.error_occurred.connect(controller.engine_failed)
        return cls(
            settings=settings,
            session=session,
            aggregator=aggregator,
            controller=controller,
            overlay=overlay,
        )
