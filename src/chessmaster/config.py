"""Application settings.

Defaults live on :class:`AppSettings`; environment variables override them:

    CHESSMASTER_ENGINE    path or PATH name of the UCI engine (default: stockfish)
    CHESSMASTER_LOGLEVEL  logging level name (default: INFO)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from chessmaster.engine.uci import SearchParameters

ENV_ENGINE = "CHESSMASTER_ENGINE"
ENV_LOGLEVEL = "CHESSMASTER_LOGLEVEL"

# Inclusive ranges offered by the UI controls.
ELO_RANGE = (1350, 2850)
DEPTH_RANGE = (1, 30)
MULTIPV_RANGE = (1, 5)


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Engine
    engine_path: str = "stockfish"
    ready_timeout_ms: int = 10_000

    # Analysis
    elo: int = 1350
    depth: int = 15
    multipv: int = 3

    # Diagnostics
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Defaults overlaid with ``CHESSMASTER_*`` environment variables."""
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get(ENV_ENGINE):
            settings = replace(settings, engine_path=env[ENV_ENGINE])
        if env.get(ENV_LOGLEVEL):
            settings = replace(settings, log_level=env[ENV_LOGLEVEL].upper())
        return settings

    def search_parameters(self) -> SearchParameters:
        return SearchParameters(elo=self.elo, depth=self.depth, multipv=self.multipv)
