"""Stderr status messages through stdlib logging.

Records are rendered as a one-character marker plus the message, matching the
terse status style of the tool: ``x`` error, ``!`` warning, ``i`` info and
``*`` success (pass ``extra={"success": True}``).
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "umm"

_RESET = "\033[0m"
_MARKERS = {
    logging.ERROR: ("x", "\033[0;31m"),
    logging.WARNING: ("!", "\033[0;33m"),
    logging.INFO: ("i", "\033[0;36m"),
    logging.DEBUG: ("-", "\033[0;34m"),
}
_SUCCESS_MARKER = ("*", "\033[0;32m")


class MarkerFormatter(logging.Formatter):
    def __init__(self, color: bool) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, "success", False):
            marker, sgr = _SUCCESS_MARKER
        else:
            level = max((lvl for lvl in _MARKERS if lvl <= record.levelno), default=logging.DEBUG)
            marker, sgr = _MARKERS[level]
        if self.color:
            marker = f"{sgr}{marker}{_RESET}"
        return f"{marker} {record.getMessage()}"


def configure_logging(color: bool | None = None, level: int = logging.INFO) -> logging.Logger:
    """Install a single stderr handler on the package logger.

    Re-running replaces the previous handler so repeated CLI invocations in
    one process do not duplicate output.
    """
    if color is None:
        color = sys.stderr.isatty()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(MarkerFormatter(color))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
