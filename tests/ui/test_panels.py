"""Tests for the analysis and control side panels."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from chessmaster.analysis.models import InfoLine, Score
from chessmaster.engine.session import EngineState
from chessmaster.engine.uci import SearchParameters
from chessmaster.ui.panels.analysis_panel import AnalysisPanel
from chessmaster.ui.panels.control_panel import ControlPanel


def _line(pv_index: int, score: Score, *moves: str) -> InfoLine:
    return InfoLine(pv_index=pv_index, score=score, line=moves)


class TestAnalysisPanel:
    def test_engine_state_labels(self) -> None:
        panel = AnalysisPanel()
        assert panel.status_text == "Offline"
        for state, text in (
            (EngineState.LOADING, "Loading..."),
            (EngineState.READY, "Ready"),
            (EngineState.FAILED, "Error"),
        ):
            panel.set_engine_state(state)
            assert panel.status_text == text

    def test_snapshot_builds_one_row_per_line(self) -> None:
        panel = AnalysisPanel()
        panel.set_snapshot(
            (
                _line(1, Score(cp=35), "e2e4", "e7e5"),
                _line(2, Score(cp=-10), "d2d4"),
            )
        )

        rows = panel.rows
        assert [row.title.text() for row in rows] == ["LINE 1", "LINE 2"]
        assert rows[0].score.text() == "+0.35"
        assert rows[0].moves.text() == "e2e4 e7e5"
        assert rows[1].score.text() == "-0.10"
        assert panel.eval_text == "+0.35"
        assert panel.mate_warning_visible is False

    def test_mate_in_principal_line_raises_warning(self) -> None:
        panel = AnalysisPanel()
        panel.set_snapshot((_line(1, Score(mate=2), "d8h4"),))
        assert panel.eval_text == "M2"
        assert panel.mate_warning_visible is True

    def test_empty_snapshot_resets(self) -> None:
        panel = AnalysisPanel()
        panel.set_snapshot((_line(1, Score(mate=2), "d8h4"),))
        panel.set_snapshot(())

        assert panel.rows == ()
        assert panel.eval_text == "0.00"
        assert panel.mate_warning_visible is False


class TestControlPanel:
    def test_initial_parameters_round_trip(self) -> None:
        params = SearchParameters(elo=2000, depth=12, multipv=4)
        assert ControlPanel(params).parameters() == params

    def test_spin_change_emits_parameters(self) -> None:
        panel = ControlPanel()
        spy = QSignalSpy(panel.parameters_changed)

        panel._elo.setValue(2400)

        assert len(spy) == 1
        assert spy[0][0] == SearchParameters(elo=2400, depth=15, multipv=3)

    def test_values_are_clamped_to_ranges(self) -> None:
        panel = ControlPanel()
        panel._multipv.setValue(9)
        panel._depth.setValue(0)
        panel._elo.setValue(100)

        params = panel.parameters()
        assert params.multipv == 5
        assert params.depth == 1
        assert params.elo == 1350

    def test_buttons_emit_signals(self) -> None:
        panel = ControlPanel()
        spies = {
            "new": QSignalSpy(panel.new_game_clicked),
            "undo": QSignalSpy(panel.undo_clicked),
            "flip": QSignalSpy(panel.flip_clicked),
            "copy": QSignalSpy(panel.copy_pgn_clicked),
        }
        panel._btn_new.click()
        panel._btn_undo.click()
        panel._btn_flip.click()
        panel._btn_copy.click()

        assert {name: len(spy) for name, spy in spies.items()} == {
            "new": 1,
            "undo": 1,
            "flip": 1,
            "copy": 1,
        }

    def test_show_copied_changes_label(self) -> None:
        panel = ControlPanel()
        panel.show_copied()
        assert panel._btn_copy.text() == "COPIED!"
