"""Command line interface for autocommit."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional

from . import __version__
from .config import load_config
from .core import AutoCommitWorkflow
from .exceptions import AutoCommitError
from .status import NullStatus, Spinner, StatusReporter

RESET = "\033[0m"
RED = "\033[91m"
YELLOW = "\033[93m"
DIM = "\033[2m"

SILENT = logging.CRITICAL + 10

logger = logging.getLogger("autocommit")


class ColorFormatter(logging.Formatter):
    _COLORS = {
        logging.DEBUG: DIM,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: RED,
    }

    def __init__(self, use_color: bool = True) -> None:
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = self._COLORS.get(record.levelno)
        if self.use_color and color:
            return f"{color}{text}{RESET}"
        return text


def verbosity_to_level(verbose: int, quiet: int) -> int:
    """Map -v/-q counts onto a logging level, INFO being the default."""
    levels = [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, SILENT]
    index = 1 - verbose + quiet
    return levels[max(0, min(index, len(levels) - 1))]


def configure_logging(level: int) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter(use_color=sys.stderr.isatty()))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


class CLI:
    """Parses arguments and runs the workflow, returning an exit code."""

    def __init__(self) -> None:
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="autocommit",
            description="Automagically generate commit messages.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Output the generated message, but don't create a commit.",
        )
        parser.add_argument(
            "-r",
            "--review",
            action="store_true",
            help="Edit the generated commit message before committing.",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Don't ask for confirmation before committing.",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="count",
            default=0,
            help="Increase logging verbosity.",
        )
        parser.add_argument(
            "-q",
            "--quiet",
            action="count",
            default=0,
            help="Decrease logging verbosity.",
        )
        parser.add_argument(
            "--version", action="version", version=f"%(prog)s {__version__}"
        )
        return parser

    def _select_status(self, dry_run: bool, level: int) -> StatusReporter:
        # The spinner stands in for the info lines it would otherwise garble.
        if dry_run or level <= logging.INFO or not sys.stderr.isatty():
            return NullStatus()
        return Spinner(sys.stderr)

    def run(self, args: Optional[list[str]] = None) -> int:
        try:
            parsed = self.parser.parse_args(args)
        except SystemExit as exc:
            return int(exc.code or 0)

        level = verbosity_to_level(parsed.verbose, parsed.quiet)
        configure_logging(level)

        try:
            config = load_config()
            workflow = AutoCommitWorkflow(
                config,
                dry_run=parsed.dry_run,
                force=parsed.force,
                review=parsed.review,
                status=self._select_status(parsed.dry_run, level),
            )
            asyncio.run(workflow.run())
        except AutoCommitError as exc:
            logger.error(str(exc))
            return 1
        except KeyboardInterrupt:
            logger.error("Interrupted.")
            return 1
        return 0


def main(argv: Optional[list[str]] = None) -> int:
    return CLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
