from core.logging.config import configure_logging, get_logger, shutdown_logging
from core.logging.context import bind_context, clear_context, get_current_context
from core.logging.canonical import log_command_complete, CommandTimer

__all__ = [
    "configure_logging",
    "get_logger",
    "shutdown_logging",
    "bind_context",
    "clear_context",
    "get_current_context",
    "log_command_complete",
    "CommandTimer",
]
