"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from chessmaster.config import AppSettings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Install the root handler; unknown level names fall back to INFO."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=_LOG_FORMAT)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="chessmaster",
        description="Play chess with live multi-line engine analysis arrows.",
    )
    parser.add_argument("--engine", help="path or PATH name of a UCI engine")
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> AppSettings:
    """Environment-aware defaults with command-line overrides applied."""
    settings = AppSettings.from_env()
    if args.engine:
        settings = replace(settings, engine_path=args.engine)
    if args.log_level:
        settings = replace(settings, log_level=args.log_level.upper())
    return settings


def main(argv: list[str] | None = None) -> None:
    """Launch the Chessmaster application."""
    from chessmaster.ui.bootstrap import run_application

    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = build_settings(args)
    configure_logging(settings.log_level)
    sys.exit(run_application(settings, [sys.argv[0]]))


if __name__ == "__main__":
    main()
