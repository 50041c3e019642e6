import json
import logging
import queue
import re
import sys
import threading
from logging.handlers import TimedRotatingFileHandler, QueueHandler, QueueListener
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from core.logging.processors import redact_sensitive_data, add_service_context

LOG_DIR = Path("logs")

_configured = False
_config_lock = threading.Lock()
_listeners: list[QueueListener] = []


EMOJI_PATTERN = re.compile(
    "["
    "\U0001F600-\U0001F64F"
    "\U0001F300-\U0001F5FF"
    "\U0001F680-\U0001F6FF"
    "\U0001F1E0-\U0001F1FF"
    "\U00002600-\U000027BF"
    "\U0001F900-\U0001F9FF"
    "\U0001FA00-\U0001FAFF"
    "\U0000200D"
    "\U0000FE0F"
    "]+",
    flags=re.UNICODE,
)

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class DualFormatFormatter(logging.Formatter):
    """Pass JSON through for files, or pretty-print it for the console."""

    def __init__(self, pretty: bool = False):
        super().__init__()
        self.pretty = pretty

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if not self.pretty:
            return msg

        try:
            data = json.loads(msg)
        except (json.JSONDecodeError, TypeError):
            return EMOJI_PATTERN.sub("", msg).strip()
        if not isinstance(data, dict):
            return msg

        level = str(data.get("level", record.levelname)).upper()
        timestamp = str(data.get("timestamp", ""))[:19].replace("T", " ")
        event = EMOJI_PATTERN.sub("", str(data.get("event", ""))).strip()
        logger_name = data.get("logger", record.name)

        extra_keys = [k for k in data if k not in ("event", "logger", "level", "timestamp", "service")]
        extra = " ".join(f"{k}={data[k]}" for k in extra_keys[:6])

        color = LEVEL_COLORS.get(level, "")
        line = f"{timestamp} {color}[{level}]{RESET} {logger_name}: {event}"
        return f"{line} {extra}" if extra else line


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: str = "logs/rosterbot.log",
    enable_console: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger once per process.

    Records are rendered to JSON by structlog, queued, and fanned out by a
    background listener to a daily-rotated file and (optionally) the console.
    """
    global _configured

    with _config_lock:
        if _configured:
            return

        if isinstance(level, str):
            level = logging.getLevelName(level)
            if not isinstance(level, int):
                level = logging.INFO

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                add_service_context,
                redact_sensitive_data,
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer(ensure_ascii=False),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = TimedRotatingFileHandler(
            filename=log_path,
            when="midnight",
            interval=1,
            backupCount=30,
            encoding="utf-8",
        )
        file_handler.setFormatter(DualFormatFormatter(pretty=False))
        file_handler.setLevel(level)

        targets: list[logging.Handler] = [file_handler]
        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(DualFormatFormatter(pretty=True))
            console_handler.setLevel(level)
            targets.append(console_handler)

        log_queue: queue.Queue[Any] = queue.Queue(-1)
        listener = QueueListener(log_queue, *targets, respect_handler_level=True)
        listener.start()
        _listeners.append(listener)

        root_logger.addHandler(QueueHandler(log_queue))
        # discord.py is chatty at INFO (gateway heartbeats)
        logging.getLogger("discord").setLevel(max(level, logging.WARNING))

        _configured = True


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)


def shutdown_logging() -> None:
    """Flush and stop queue listeners (call on process exit)."""
    for listener in _listeners:
        listener.stop()
    _listeners.clear()
