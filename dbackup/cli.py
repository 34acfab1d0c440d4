"""Command line entry point for dbackup."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from core.logging_utils import configure_logging
from core.settings import load_settings

from . import __version__
from .api import BackupService
from .errors import BackupError, IgnoreFileExistsError, InsufficientDiskSpaceError
from .models import CommandOptions

LOGGER = logging.getLogger("dbackup.cli")

# Failures that end one command but let the following commands run.
RECOVERABLE_ERRORS = (IgnoreFileExistsError, InsufficientDiskSpaceError)

DESCRIPTION = (
    "Creates a zip archive from a folder. Unwanted files can be filtered out by "
    "creating a .dbackupignore file in the source directory."
)


class _OrderedCommand(argparse.Action):
    """Record path commands in the order they appear on the command line."""

    def __call__(self, parser, namespace, values, option_string=None):  # noqa: D401
        commands: List[Tuple[str, str]] = list(getattr(namespace, "commands", None) or [])
        commands.append((self.dest, values))
        namespace.commands = commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dbackup", description=DESCRIPTION)
    parser.set_defaults(commands=None)
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Explain what is being done.",
    )
    parser.add_argument(
        "-a",
        "--annotate",
        action="store_true",
        help="Do not perform any action, and explain what would have been done.",
    )
    parser.add_argument(
        "-i",
        "--init",
        dest="init",
        action=_OrderedCommand,
        metavar="PATH",
        help="Create a default .dbackupignore file.",
    )
    parser.add_argument(
        "-f",
        "--from",
        dest="source",
        action=_OrderedCommand,
        metavar="PATH",
        help="Source path to an existing directory.",
    )
    parser.add_argument(
        "-t",
        "--to",
        dest="destination",
        action=_OrderedCommand,
        metavar="PATH",
        help="Destination path to an existing directory. Runs the backup of the preceding --from.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Settings file to use instead of the default search path.",
    )
    parser.add_argument(
        "--log-json",
        type=Path,
        metavar="PATH",
        help="Append structured JSON log records to PATH.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_commands(service: BackupService, commands: Sequence[Tuple[str, str]]) -> int:
    """Execute ``--init``, ``--from`` and ``--to`` in command-line order.

    Returns the number of commands that failed with a recoverable error.
    Any other :class:`BackupError` stops the remaining commands.
    """
    failures = 0
    for name, value in commands:
        try:
            if name == "init":
                service.init_ignore_file(value)
            elif name == "source":
                service.set_source(value)
            elif name == "destination":
                service.backup_to(value)
        except RECOVERABLE_ERRORS as exc:
            LOGGER.debug("Command %s %s failed: %s", name, value, exc)
            print(str(exc), file=sys.stderr)
            failures += 1
    return failures


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.config)
    log_settings = settings.get("logging") if isinstance(settings.get("logging"), dict) else {}
    json_path = args.log_json or log_settings.get("json_path")
    configure_logging(level=log_settings.get("level") or logging.INFO, json_path=Path(json_path) if json_path else None)

    if not args.commands:
        parser.print_help()
        return 0

    options = CommandOptions(verbose=args.verbose, annotate=args.annotate)
    service = BackupService(options=options, settings=settings)
    try:
        failures = run_commands(service, args.commands)
    except BackupError as exc:
        LOGGER.debug("Command failed: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    return 1 if failures else 0


__all__ = ["build_parser", "main", "run_commands"]
