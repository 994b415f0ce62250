"""Application entry point."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import random
import sys
from collections.abc import Sequence

from lonely_game.app.controller import GameController
from lonely_game.infra.config import load_env_files, load_settings
from lonely_game.infra.logging import setup_logging, shutdown_logging
from lonely_game.ui.console import ConsoleDisplay, run_console

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lonely-game",
        description="Build four factories, then sink the hidden fleet before it finds them.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible rounds.")
    parser.add_argument("--log-level", default=None, help="Log level (default from env or INFO).")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Lonely Game console application."""
    args = build_parser().parse_args(argv)
    load_env_files()
    settings = load_settings(seed=args.seed, log_level=args.log_level)
    log_file = setup_logging(settings)
    logger.info(
        "starting seed=%s log_file=%s",
        settings.seed,
        log_file,
        extra={"settings": dataclasses.asdict(settings)},
    )

    display = ConsoleDisplay(sys.stdout)
    try:
        controller = GameController(display, random.Random(settings.seed))
        run_console(controller, display, sys.stdin)
    except Exception:
        logger.exception("unhandled_error")
        raise
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
