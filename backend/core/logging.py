"""core/logging.py — JSON log lines to stdout and to a rotating file.

configure_logging() runs once from the lifespan in api/main.py; modules then
use logging.getLogger(__name__) and pass structured fields through extra=.
Every record is stamped with the service name and environment.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from core.config import settings

SERVICE_NAME = "event-store-api"

DEFAULT_LOG_FILE = Path(__file__).resolve().parent.parent.parent / "logs" / "app.log"
ROTATE_AT_BYTES = 10 * 1024 * 1024
ROTATED_FILES_KEPT = 5


class _ServiceFields(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.service = SERVICE_NAME
        record.environment = settings.environment
        return True


def _build_handlers(log_file: Path) -> list[logging.Handler]:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return [
        logging.StreamHandler(sys.stdout),
        logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=ROTATE_AT_BYTES,
            backupCount=ROTATED_FILES_KEPT,
            encoding="utf-8",
        ),
    ]


def configure_logging(log_level: str = "DEBUG", log_file: str | Path = DEFAULT_LOG_FILE) -> None:
    """Replace the root logger's handlers with the JSON console and file pair.

    Unknown level names fall back to DEBUG.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.DEBUG

    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(service)s %(environment)s"
    )
    handlers = _build_handlers(Path(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(_ServiceFields())

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger(__name__).debug(
        "logging configured", extra={"log_level": log_level, "log_file": str(log_file)}
    )
