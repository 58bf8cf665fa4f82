"""UCI command builders for the subset of the protocol we drive."""

from __future__ import annotations

from dataclasses import dataclass

UCI = "uci"
IS_READY = "isready"
NEW_GAME = "ucinewgame"
STOP = "stop"
QUIT = "quit"

READY_OK = "readyok"
BEST_MOVE = "bestmove"


@dataclass(slots=True, frozen=True)
class SearchParameters:
    """Engine constraints for one analysis request."""

    elo: int = 1350
    depth: int = 15
    multipv: int = 3

    def __post_init__(self) -> None:
        if self.elo <= 0:
            raise ValueError(f"Strength limit must be positive, got {self.elo}")
        if self.depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {self.depth}")
        if self.multipv < 1:
            raise ValueError(f"MultiPV must be >= 1, got {self.multipv}")


def set_option(name: str, value: object) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"setoption name {name} value {value}"


def position_fen(fen: str) -> str:
    return f"position fen {fen}"


def go_depth(depth: int) -> str:
    return f"go depth {depth}"


def option_commands(params: SearchParameters) -> list[str]:
    """Option-setting commands for *params*, in the order they are sent."""
    return [
        set_option("MultiPV", params.multipv),
        set_option("UCI_LimitStrength", True),
        set_option("UCI_Elo", params.elo),
    ]


def search_commands(fen: str, params: SearchParameters) -> list[str]:
    """Full restart sequence: stop, options, position, go."""
    return [STOP, *option_commands(params), position_fen(fen), go_depth(params.depth)]


def handshake_commands() -> list[str]:
    """Commands sent right after the engine process starts."""
    return [UCI, IS_READY]
