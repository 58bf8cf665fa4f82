"""Tests for UCI command builders and the line buffer."""

from __future__ import annotations

import pytest

from chessmaster.core.position import STARTING_FEN
from chessmaster.engine.session import MAX_BUFFER_SIZE, LineBuffer
from chessmaster.engine.uci import (
    SearchParameters,
    handshake_commands,
    option_commands,
    search_commands,
    set_option,
)


class TestSearchParameters:
    def test_defaults_are_valid(self) -> None:
        params = SearchParameters()
        assert params.depth >= 1
        assert params.multipv >= 1

    @pytest.mark.parametrize(
        "kwargs",
        [{"depth": 0}, {"multipv": 0}, {"elo": 0}, {"depth": -3}],
    )
    def test_rejects_out_of_range_values(self, kwargs: dict[str, int]) -> None:
        with pytest.raises(ValueError):
            SearchParameters(**kwargs)


class TestCommands:
    def test_set_option_renders_booleans_in_lowercase(self) -> None:
        assert set_option("UCI_LimitStrength", True) == (
            "setoption name UCI_LimitStrength value true"
        )

    def test_option_commands_order(self) -> None:
        assert option_commands(SearchParameters(elo=1800, depth=12, multipv=2)) == [
            "setoption name MultiPV value 2",
            "setoption name UCI_LimitStrength value true",
            "setoption name UCI_Elo value 1800",
        ]

    def test_search_commands_stop_first_and_go_last(self) -> None:
        params = SearchParameters(elo=2000, depth=9, multipv=3)
        commands = search_commands(STARTING_FEN, params)

        assert commands[0] == "stop"
        assert commands[1:4] == option_commands(params)
        assert commands[4] == f"position fen {STARTING_FEN}"
        assert commands[5] == "go depth 9"
        assert len(commands) == 6

    def test_handshake(self) -> None:
        assert handshake_commands() == ["uci", "isready"]


class TestLineBuffer:
    def test_reassembles_lines_split_across_chunks(self) -> None:
        buf = LineBuffer()
        assert buf.feed(b"info depth 1 mul") == []
        assert buf.feed(b"tipv 1 pv e2e4\nbest") == ["info depth 1 multipv 1 pv e2e4"]
        assert buf.feed(b"move e2e4\n") == ["bestmove e2e4"]

    def test_strips_carriage_returns(self) -> None:
        assert LineBuffer().feed(b"readyok\r\nuciok\r\n") == ["readyok", "uciok"]

    def test_keeps_empty_lines(self) -> None:
        assert LineBuffer().feed(b"a\n\nb\n") == ["a", "", "b"]

    def test_overflow_drops_partial_data(self) -> None:
        buf = LineBuffer()
        assert buf.feed(b"x" * (MAX_BUFFER_SIZE + 1)) == []
        assert buf.feed(b"ok\n") == ["ok"]
