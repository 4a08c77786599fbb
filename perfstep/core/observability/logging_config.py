"""
Logging configuration — two channels for the perfstep CLI.

Diagnostics: perfstep's own modules log through
``logging.getLogger(__name__)`` to stderr. ``setup_logging()`` is called
once by main.py; the level comes from the CLI flags, else from
PERFSTEP_LOG_LEVEL, else WARNING. PERFSTEP_LOG_FILE adds a file copy,
optionally at its own PERFSTEP_LOG_FILE_LEVEL.

Build console: ``build_log()`` returns the logger that carries the
"Performance test: ..." progress lines and the relayed bzt output. It
always logs at INFO and never reaches the root logger, so a quiet
diagnostic level cannot hide a build log.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Above INFO the stderr console only shows the message
_FMT_PLAIN = "%(message)s"

# At INFO/DEBUG, and always in the log file
_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_DATEFMT_CONSOLE = "%H:%M:%S"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

BUILD_LOGGER = "perfstep.build"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Route perfstep diagnostics to stderr and, optionally, a file.

    Args:
        level: Level name for the stderr console.
        log_file: Optional path of a diagnostics file.
        log_file_level: Level for the file; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    if console_level <= logging.INFO:
        console.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_CONSOLE))
    else:
        console.setFormatter(logging.Formatter(_FMT_PLAIN))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # A broken log handler must not fail a build
    logging.raiseExceptions = False


def build_log(stream: TextIO | None = None) -> logging.Logger:
    """Return the build console logger, writing bare lines to ``stream``.

    Replaces any handler from a previous call, so the console always
    points at the latest stream.
    """
    log = logging.getLogger(BUILD_LOGGER)
    for handler in list(log.handlers):
        log.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(_FMT_PLAIN))
    log.addHandler(handler)
    log.setLevel(logging.INFO)
    log.propagate = False
    return log


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else None
    return numeric if isinstance(numeric, int) else logging.WARNING
