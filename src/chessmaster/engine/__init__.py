"""External UCI engine access: protocol commands and the process session."""

from chessmaster.engine.session import (
    EngineLoadError,
    EngineSession,
    EngineState,
    LineBuffer,
)
from chessmaster.engine.uci import SearchParameters, search_commands

__all__ = [
    "EngineLoadError",
    "EngineSession",
    "EngineState",
    "LineBuffer",
    "SearchParameters",
    "search_commands",
]
