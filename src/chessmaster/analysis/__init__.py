"""Engine analysis APIs."""

from chessmaster.analysis.aggregator import AnalysisAggregator
from chessmaster.analysis.controller import AnalysisController, ControllerState
from chessmaster.analysis.models import InfoLine, Score, Snapshot, principal_line
from chessmaster.analysis.parser import (
    BestMove,
    ParsedInfo,
    parse_bestmove,
    parse_info_line,
)

__all__ = [
    "AnalysisAggregator",
    "AnalysisController",
    "BestMove",
    "ControllerState",
    "InfoLine",
    "ParsedInfo",
    "Score",
    "Snapshot",
    "parse_bestmove",
    "parse_info_line",
    "principal_line",
]
