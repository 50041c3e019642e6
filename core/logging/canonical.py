"""Canonical log lines: exactly one entry per finished command."""

import time
from typing import Any, Optional

from core.logging.config import get_logger

_log = get_logger("canonical")


def log_command_complete(
    command: str,
    user_id: int,
    guild_id: Optional[int],
    channel_id: Optional[int],
    duration_ms: float,
    success: bool,
    error: Optional[str] = None,
    **extra: Any,
) -> None:
    log_method = _log.info if success else _log.warning
    log_method(
        "command_complete",
        command=command,
        user_id=user_id,
        guild_id=guild_id,
        channel_id=channel_id,
        duration_ms=round(duration_ms, 2),
        success=success,
        error=error,
        **extra,
    )


class CommandTimer:
    """Times a command between ``start()`` and ``finish()``.

    discord.py splits invocation into before/after hooks, so the timer is
    started in ``cog_before_invoke`` and finished in ``cog_after_invoke`` or
    the error handler, whichever runs.
    """

    def __init__(
        self,
        command: str,
        user_id: int,
        guild_id: Optional[int] = None,
        channel_id: Optional[int] = None,
    ):
        self.command = command
        self.user_id = user_id
        self.guild_id = guild_id
        self.channel_id = channel_id
        self.start_time: float = 0
        self.finished = False
        self.extra: dict[str, Any] = {}

    def start(self) -> "CommandTimer":
        self.start_time = time.perf_counter()
        return self

    def add_context(self, **kwargs: Any) -> None:
        self.extra.update(kwargs)

    def finish(self, error: Optional[str] = None) -> None:
        if self.finished:
            return
        self.finished = True
        log_command_complete(
            command=self.command,
            user_id=self.user_id,
            guild_id=self.guild_id,
            channel_id=self.channel_id,
            duration_ms=(time.perf_counter() - self.start_time) * 1000,
            success=error is None,
            error=error,
            **self.extra,
        )

    def __enter__(self) -> "CommandTimer":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.finish(str(exc_val) if exc_type is not None else None)
