"""Shared logging infrastructure for the launchpad package."""

import logging
import os
import sys

logger = logging.getLogger("launchpad")
logger.setLevel(logging.INFO)
_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter(_FORMAT))
if not logger.handlers:
    logger.addHandler(_handler)

# numeric levels accepted by logprintf and on the command line
_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}


def set_debug(enabled: bool) -> None:
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)


def parse_level(text: str) -> int:
    """Translate ``0``-``3`` or a level name into a :mod:`logging` level.

    Raises :class:`ValueError` for anything else.
    """

    text = (text or "").strip()
    if text.isdigit():
        level = _LEVELS.get(int(text))
        if level is None:
            raise ValueError(f"Log level out of range: {text!r}")
        return level
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {text!r}")
    return level


def set_level(text: str) -> None:
    logger.setLevel(parse_level(text))


def logprintf(
    level: int, fmt: str, *args: object, exc_info: BaseException | None = None
) -> None:
    msg = fmt % args if args else fmt
    logger.log(_LEVELS.get(level, logging.INFO), msg, exc_info=exc_info)


def setup_file_logging(path: str) -> str:
    """Send log output to ``path`` instead of standard error.

    ``-`` keeps logging on standard error. Returns the absolute log file
    path, or ``""`` when logging stays on the console.
    """

    if not path or path == "-":
        return ""

    logfile = os.path.abspath(path)
    logdir = os.path.dirname(logfile)
    os.makedirs(logdir, exist_ok=True)
    if not os.access(logdir, os.W_OK):
        raise PermissionError(f"Cannot write to log directory: {logdir}")

    fh = logging.FileHandler(logfile, encoding="utf-8")
    fh.setFormatter(logging.Formatter(_FORMAT))
    logger.removeHandler(_handler)
    logger.addHandler(fh)
    return logfile
