"""Command-line interface for the launchpad.

This thin wrapper parses the command-line options, applies them on top of
:class:`launchpad.settings.Settings` and delegates to
:func:`launchpad.runtime.run`.

``launchpad start`` runs the application with its control server,
``launchpad status`` and ``launchpad stop`` talk to a running instance and
exit with an LSB init script status code::

    0  the command was delivered
    1  the instance did not answer properly
    3  no instance is running
    4  the control address cannot be determined
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .logging_utils import logprintf, parse_level, set_level, setup_file_logging
from .runtime import run
from .settings import Settings

# -j without a value selects the default control address
_DEFAULT_CONTROL = ""


def _log_level(text: str) -> str:
    try:
        parse_level(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return text


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launchpad", description="Launchpad application launcher"
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=("start", "stop", "status"),
        help="start the launchpad with its control server, or stop/query a "
        "running one (default: run without control server)",
    )
    parser.add_argument(
        "-c",
        "--home",
        metavar="DIR",
        default=None,
        help="Application home directory (default: ./launchpad)",
    )
    parser.add_argument(
        "-j",
        "--control",
        metavar="[HOST:]PORT",
        nargs="?",
        const=_DEFAULT_CONTROL,
        default=None,
        help="Control channel address (default: 127.0.0.1 with a free port)",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        metavar="LEVEL",
        type=_log_level,
        default=None,
        help="Log level, 0-3 (error, warn, info, debug) or a level name",
    )
    parser.add_argument(
        "-f",
        "--log-file",
        metavar="PATH",
        default=None,
        help="Log file, '-' for standard error",
    )
    parser.add_argument(
        "--reuse-port",
        action="store_true",
        help="On start, reuse the persisted control port instead of a new one",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point used by the ``launchpad`` script."""

    parser = _build_arg_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = Settings()
    updates: dict[str, object] = {}
    if args.home is not None:
        updates["home"] = args.home
    if args.log_level is not None:
        updates["log_level"] = args.log_level
    if args.log_file is not None:
        updates["log_file"] = args.log_file
    if args.reuse_port:
        updates["select_new_port"] = False
    if updates:
        settings = settings.model_copy(update=updates)

    try:
        set_level(settings.log_level)
    except ValueError as exc:
        parser.error(f"LAUNCHPAD_LOG_LEVEL: {exc}")
    try:
        setup_file_logging(settings.log_file)
    except OSError as exc:
        logprintf(0, "Cannot log to %s: %s", settings.log_file, exc)
        return 1

    listen_spec = args.control or None
    return run(
        settings,
        command=args.command,
        listen_spec=listen_spec,
        with_control=args.control is not None,
    )


def console_main() -> None:
    sys.exit(main())
