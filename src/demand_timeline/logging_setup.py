# src/demand_timeline/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "demand.log"

_LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Longest prefix wins. The layout is rebuilt on every tick, so the timeline
# engine only reaches the console when something is wrong.
_CONSOLE_MIN_LEVELS: dict[str, int] = {
    "demand_timeline.timeline.": logging.WARNING,
    "demand_timeline.": logging.NOTSET,
    "py.warnings": logging.ERROR,
}
_THIRD_PARTY_MIN_LEVEL = logging.ERROR


class _ConsoleNoiseFilter(logging.Filter):
    """Keep the interactive prompt readable; the file log still gets everything."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_min_level(record.name)


def console_min_level(logger_name: str) -> int:
    best = ""
    for prefix in _CONSOLE_MIN_LEVELS:
        if logger_name.startswith(prefix) and len(prefix) > len(best):
            best = prefix
    if not best:
        return _THIRD_PARTY_MIN_LEVEL
    return _CONSOLE_MIN_LEVELS[best]


def setup_logging(
    *,
    log_dir: str | Path = ".local/demand",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send filtered logs to stderr and full logs to <log_dir>/demand.log.

    Replaces any handlers already on the root logger, so calling it again
    (e.g. from tests) does not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)
        if isinstance(h, logging.FileHandler):
            h.close()

    fmt = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)

    root.addHandler(console)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
