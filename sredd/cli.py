"""Command-line interface for the sredd application."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pprint
import sys
from pathlib import Path
from typing import List, Optional

from .config import default_config_path, parse_app_config
from .errors import SreddError
from .models import APP_LONG_NAME, APP_NAME, APP_VERSION
from .runner import RunConfig, execute

logger = logging.getLogger(__name__)

VERSION_TEXT = f"""\
{APP_NAME} - {APP_LONG_NAME}, version {APP_VERSION}

Web: https://github.com/ggustafsson/sredd
Git: https://github.com/ggustafsson/sredd.git

Written by Göran Gustafsson <gustafsson.g@gmail.com>
Released under the BSD 3-Clause license"""


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on malformed invocations."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = _ArgumentParser(
        prog=APP_NAME,
        description="Run without arguments to check subreddits specified in config.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=VERSION_TEXT,
        help="Display version information",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to the JSON config file (default: {default_config_path()}).",
    )

    # Overrides for logging/debugging
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Send sredd's log records to stderr and, when given, to ``log_file``."""
    log_level = logging.getLevelName(level_name.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logger.debug(
        "%s %s starting, log level %s%s",
        APP_NAME,
        APP_VERSION,
        level_name.upper(),
        f", also logging to {log_file}" if log_file else "",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config or str(default_config_path()))

        # CLI overrides config
        log_level = args.log_level or app_config.logging.level
        log_file = args.log_file or app_config.logging.file
        try:
            configure_logging(log_level, log_file)
        except ValueError as exc:
            parser.error(str(exc))

        config = RunConfig(
            command=app_config.command,
            subreddits=tuple(app_config.subreddits),
            storage_dir=app_config.program_path,
            command_args=tuple(app_config.command_args),
            filter_comments=app_config.filter_comments,
        )
        logger.debug(
            "Active Configuration:\n%s", pprint.pformat(dataclasses.asdict(config))
        )

        execute(config)
    except SreddError as exc:
        logger.error("%s: %s", exc.label, exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    return 0
