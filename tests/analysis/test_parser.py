"""Tests for the engine output line grammar."""

from __future__ import annotations

import pytest

from chessmaster.analysis.parser import BestMove, parse_bestmove, parse_info_line


class TestParseInfoLine:
    def test_centipawn_line(self) -> None:
        parsed = parse_info_line(
            "info depth 18 seldepth 24 multipv 2 score cp -35 nodes 123456 "
            "nps 900000 time 137 pv d7d5 c2c4 e7e6 b1c3 g8f6 c1g5"
        )
        assert parsed is not None
        assert parsed.pv_index == 2
        assert parsed.depth == 18
        assert parsed.cp == -35
        assert parsed.mate is None
        assert parsed.moves == ("d7d5", "c2c4", "e7e6", "b1c3", "g8f6", "c1g5")

    def test_mate_line(self) -> None:
        parsed = parse_info_line("info depth 5 multipv 1 score mate -2 pv h5f7")
        assert parsed is not None
        assert parsed.mate == -2
        assert parsed.cp is None

    def test_score_bound_qualifier_is_tolerated(self) -> None:
        parsed = parse_info_line("info depth 9 multipv 1 score cp 40 lowerbound pv e2e4")
        assert parsed is not None
        assert parsed.cp == 40
        assert parsed.moves == ("e2e4",)

    def test_missing_score_keeps_line_with_neutral_score(self) -> None:
        parsed = parse_info_line("info depth 1 multipv 3 pv g1f3")
        assert parsed is not None
        assert parsed.cp is None and parsed.mate is None

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "uciok",
            "readyok",
            "bestmove e2e4",
            "info depth 10 score cp 20 pv e2e4",  # no multipv
            "info depth 10 currmove e2e4 currmovenumber 1",
            "info string multipv 1 pv e2e4",  # free text
            "id name Stockfish 16",
        ],
    )
    def test_non_analysis_lines_are_ignored(self, line: str) -> None:
        assert parse_info_line(line) is None

    @pytest.mark.parametrize(
        "line",
        [
            "info depth 10 multipv x score cp 20 pv e2e4",
            "info depth 10 multipv 0 score cp 20 pv e2e4",
            "info depth 10 multipv 1 score cp abc pv e2e4",
            "info depth 10 multipv 1 score wdl 500 pv e2e4",
            "info depth 10 multipv 1 score cp 20",
            "info depth 10 multipv 1 score cp 20 pv",
            "info depth 10 multipv",
            "info multipv 1 score",
        ],
    )
    def test_malformed_multipv_lines_are_dropped(self, line: str) -> None:
        assert parse_info_line(line) is None


class TestParseBestMove:
    def test_bestmove_with_ponder(self) -> None:
        assert parse_bestmove("bestmove e2e4 ponder e7e5") == BestMove("e2e4", "e7e5")

    def test_bestmove_without_legal_move(self) -> None:
        assert parse_bestmove("bestmove (none)") == BestMove(None)

    def test_other_lines(self) -> None:
        assert parse_bestmove("info depth 1 multipv 1 pv e2e4") is None
        assert parse_bestmove("") is None
