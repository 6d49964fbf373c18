"""Logging setup for arguslive.

Modules log through the standard logging.getLogger(__name__) with a
bracketed component tag in front of the message:

    logger.info("[GATE] ARGUS TV API version %d verified", 66)

setup_logging() is called once by the API lifespan. When arguslive runs
inside a host that owns logging, skip it and the host's handlers apply.

Environment variables (read through Config):
    LOG_LEVEL: console level (default: INFO)
    LOG_DIR: directory for rotating log files (default: <project>/logs)
    LOG_FORMAT: "text" or "json" (default: text)
    LOG_TO_FILE: "false" to log to the console only (default: true)
"""

import json
import logging
import re
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from arguslive.config import VERSION, Config

_configured = False

# "[STREAM] Opening channel ch-1" -> ("STREAM", "Opening channel ch-1")
_TAG_RE = re.compile(r"^\[([A-Z_]+)\]\s*(.*)$", re.DOTALL)

# Chatty third-party loggers; keepalive ticks hit httpx every interval
_QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn",
    "uvicorn.access",
)

_MAX_BYTES = 5 * 1024 * 1024


def split_component(message: str) -> tuple[str | None, str]:
    """Split a leading [TAG] off a log message.

    >>> split_component("[ARGUS] Stopped live stream")
    ('ARGUS', 'Stopped live stream')
    >>> split_component("plain")
    (None, 'plain')
    """
    match = _TAG_RE.match(message)
    if not match:
        return None, message
    return match.group(1), match.group(2)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with the [TAG] split out as "component"."""

    def format(self, record: logging.LogRecord) -> str:
        component, message = split_component(record.getMessage())
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": component,
            "message": message,
            "thread": record.threadName,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def _text_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=3, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: str | None = None,
    log_dir: str | Path | None = None,
    use_json: bool | None = None,
    log_to_file: bool | None = None,
) -> None:
    """Configure the root logger. Later calls are no-ops.

    Arguments override the matching environment variable.
    """
    global _configured
    if _configured:
        return

    level_name = (log_level or Config.LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    if use_json is None:
        use_json = Config.LOG_FORMAT.lower() == "json"
    if log_to_file is None:
        log_to_file = Config.LOG_TO_FILE

    formatter = JSONFormatter() if use_json else _text_formatter()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(min(level, logging.DEBUG) if log_to_file else level)
    root.handlers.clear()
    root.addHandler(console)

    log_path = None
    if log_to_file:
        log_path = Path(log_dir) if log_dir else Config.get_log_dir()
        log_path.mkdir(parents=True, exist_ok=True)
        # Full detail (including keep-alive ticks) goes to the file
        root.addHandler(_rotating_handler(log_path / "arguslive.log", logging.DEBUG, formatter))
        root.addHandler(
            _rotating_handler(log_path / "arguslive_errors.log", logging.ERROR, formatter)
        )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

    _configured = True

    logger = logging.getLogger("arguslive")
    logger.info("[STARTUP] arguslive %s", VERSION)
    logger.info(
        "[STARTUP] Log level %s, format %s, files %s",
        logging.getLevelName(level),
        "json" if use_json else "text",
        log_path or "disabled",
    )
