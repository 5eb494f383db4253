"""
Logging configuration for content builds and checks.

Provides one formatter for every logger in the process so schema
failures, collection loading and language diagnostics share a
timestamp format. Records logged with ``extra={"entry_id": ..., "field": ...}``
are tagged with the content entry they concern, e.g.::

    [2024-05-20 10:00:00.123] [ERROR] [src.content.main] [hello.md:title] Field required
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(entry)s%(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def entry_tag(record: logging.LogRecord) -> str:
    """Build the ``[entry:field] `` prefix for a record, or "" when it has no entry."""
    entry_id = getattr(record, "entry_id", None)
    if not entry_id:
        return ""
    field = getattr(record, "field", None)
    return f"[{entry_id}:{field}] " if field else f"[{entry_id}] "


class BuildLogFormatter(logging.Formatter):
    """Millisecond timestamps plus the content entry a record is about."""

    def format(self, record: logging.LogRecord) -> str:
        record.entry = entry_tag(record)
        return super().format(record)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        ct = datetime.fromtimestamp(record.created)
        return ct.strftime(datefmt or LOG_DATE_FORMAT) + f".{int(record.msecs):03d}"


def setup_build_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """
    Route every logger of a build through one stderr handler (and a file).

    Args:
        level: DEBUG, INFO, WARNING, or ERROR; unknown names mean INFO
        log_file: Optional file path for persistent logs
    """
    formatter = BuildLogFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
