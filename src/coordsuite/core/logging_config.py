"""
Logging setup for the conversion service.

The console is colored in development. File logs rotate and can be written
as JSON lines that carry the request and conversion fields attached with
``log_context()`` or ``extra=``.
"""

import contextvars
import json
import logging
import logging.handlers
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from coordsuite.core.config import settings

# Record attributes written to JSON log lines when set
CONTEXT_FIELDS = (
    "request_id",
    "http_method",
    "request_path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_kind",
    "source_format",
    "converted",
    "failed",
)

_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "coordsuite_log_context", default={}
)


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """
    Attach fields to every record logged inside the block.

    Contexts nest, inner values win. The context is per task, so concurrent
    requests never see each other's fields.
    """
    token = _log_context.set({**_log_context.get(), **fields})
    try:
        yield _log_context.get()
    finally:
        _log_context.reset(token)


class ContextFilter(logging.Filter):
    """Copy the current log context onto records; ``extra=`` values take precedence."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.COLORS.get(record.levelno)
        if color is None:
            return formatted
        return formatted.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def get_log_level(level_name: str) -> int:
    """Logging constant for a level name; INFO for unknown names."""
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_logs: bool = False,
    enable_console: bool = True,
) -> None:
    """
    Configure the root logger.

    Existing root handlers are replaced, so calling this twice is safe.

    Args:
        log_level: Level name; defaults to settings.log_level, then DEBUG in
            development and INFO elsewhere
        log_file: Rotating log file, created with its directory
        json_logs: Write the file log as JSON lines
        enable_console: Log to stdout
    """
    if log_level is None:
        log_level = settings.log_level or (
            "DEBUG" if settings.environment == "development" else "INFO"
        )
    level = get_log_level(log_level)

    handlers: List[logging.Handler] = []
    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        layout = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"
        if settings.environment == "development":
            console_handler.setFormatter(ColoredFormatter(layout, datefmt="%H:%M:%S"))
        else:
            console_handler.setFormatter(logging.Formatter(layout, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        if json_logs:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if any(isinstance(f, ContextFilter) for f in handler.filters):
            handler.close()
    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(ContextFilter())
        root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    root_logger.debug(f"Logging configured at {log_level} (json={json_logs}, file={log_file})")
