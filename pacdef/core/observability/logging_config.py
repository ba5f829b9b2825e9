"""
Logging for the pacdef CLI.

Backend warnings (a package manager that is missing or fails to answer)
go through the ``logging`` module and must read like ordinary CLI output,
so the default console format is the bare message. ``-v`` and ``--debug``
add timestamps and the emitting module, for tracing which package-manager
command ran when.

Console level, highest priority first:
    --debug, --verbose, --quiet, $PACDEF_LOG_LEVEL, WARNING

$PACDEF_LOG_FILE additionally writes a detailed log, at
$PACDEF_LOG_FILE_LEVEL or the console level.
"""

from __future__ import annotations

import logging
import os
import sys

_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

# (upper bound of level, format, date format), first match wins
_CONSOLE_FORMATS = (
    (logging.DEBUG, _DETAILED, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> str:
    """Console level name from the global CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get("PACDEF_LOG_LEVEL", "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Route pacdef's log records to stderr and, optionally, a file.

    Replaces any handlers already on the root logger, so calling it twice
    (as the CLI tests do) never duplicates output.

    Args:
        level: Console level name.
        log_file: Path of an extra log file.
        log_file_level: Level name for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)
    handlers: list[logging.Handler] = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(min(handler.level for handler in handlers))


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_console_formatter(level))
    return handler


def _console_formatter(level: int) -> logging.Formatter:
    for bound, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= bound:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def _parse_level(level: str | None) -> int:
    """Numeric level for a name; empty or unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
