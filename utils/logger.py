"""
Logging configuration for the application.
Console output is colored; file output is one JSON object per line.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from config import Config

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _record_context(record: logging.LogRecord) -> dict:
    """Collect contextual fields passed through `extra=`."""
    return {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}


class ColoredFormatter(logging.Formatter):
    """Custom formatter with log levels."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors and trailing context."""
        color = self.COLORS.get(record.levelname, self.RESET)
        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            line = super().format(record)
        finally:
            record.levelname = levelname

        context = _record_context(record)
        if context:
            line = f"{line} {json.dumps(context, default=str)}"
        return line


class JSONFormatter(logging.Formatter):
    """Formats records as JSON lines with timestamp, level, message and context."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
        }
        payload.update(_record_context(record))

        if record.exc_info:
            payload["stack"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logger(name: str, level: int = logging.INFO, console: bool = True) -> logging.Logger:
    """
    Set up a logger.

    Args:
        name: Logger name
        level: Logging level
        console: Whether to attach a colored stdout handler

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers or not console:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    return logger


def configure_file_logging(logger: logging.Logger, log_dir: str | Path) -> list[logging.Handler]:
    """
    Attach the append-only error and combined log files to a logger.

    Calling this again with the same directory is a no-op.

    Args:
        logger: Logger to attach handlers to
        log_dir: Directory holding error.log and combined.log

    Returns:
        The handlers added by this call
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    targets = [
        (log_path / Config.ERROR_LOG_FILE, logging.ERROR),
        (log_path / Config.COMBINED_LOG_FILE, logging.DEBUG),
    ]
    existing = {
        getattr(handler, "baseFilename", None)
        for handler in logger.handlers
    }

    added = []
    for file_path, level in targets:
        resolved = str(file_path.resolve())
        if resolved in existing:
            continue

        handler = logging.FileHandler(resolved, mode="a", encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        added.append(handler)

    return added


def detach_handlers(logger: logging.Logger, handlers: list[logging.Handler]) -> None:
    """Remove and close handlers previously attached to a logger."""
    for handler in handlers:
        logger.removeHandler(handler)
        handler.close()


app_logger = setup_logger("psycanvas", console=not Config.is_production())
