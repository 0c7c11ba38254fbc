"""
Logging configuration — central setup for the CLI entrypoint.

Called by main.py at startup, and once more when a command has loaded
its settings.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

The console level is resolved in precedence order:
    CLI flag  >  LWCP_LOG_LEVEL env var  >  ``log_level`` setting  >  WARNING

The ``log_level`` setting is also what the preview command passes to
sfdx as ``--loglevel``, so level names follow Python's plus the sfdx
spellings ``trace``, ``warn`` and ``fatal``.

Optional file output via LWCP_LOG_FILE / LWCP_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "LWCP_LOG_LEVEL"
LOG_FILE_ENV = "LWCP_LOG_FILE"
LOG_FILE_LEVEL_ENV = "LWCP_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

_FMT_MINIMAL = "%(message)s"

_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# sfdx --loglevel names that Python does not know
_LEVEL_ALIASES = {
    "TRACE": logging.DEBUG,
    "WARN": logging.WARNING,
    "FATAL": logging.CRITICAL,
}


def resolve_level(flag_level: str | None = None, configured: str | None = None) -> str:
    """Pick the console level name by precedence (see module docstring)."""
    if flag_level:
        return flag_level
    env_level = os.environ.get(LEVEL_ENV)
    if env_level:
        return env_level
    if configured:
        return configured
    return "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Safe to call again: handlers from a previous call are replaced.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL,
            or one of the sfdx aliases).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    numeric_level = parse_level(level)

    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)
    logging.raiseExceptions = False


def setup_from_env(level: str) -> None:
    """``setup_logging`` with the file options taken from the environment."""
    setup_logging(
        level=level,
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


def parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    name = level.strip().upper()
    if name in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[name]
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
