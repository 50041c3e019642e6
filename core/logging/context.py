from contextvars import ContextVar
from typing import Any, Dict, Optional
import uuid

import structlog

_user_id: ContextVar[Optional[int]] = ContextVar("user_id", default=None)
_guild_id: ContextVar[Optional[int]] = ContextVar("guild_id", default=None)
_channel_id: ContextVar[Optional[int]] = ContextVar("channel_id", default=None)
_command: ContextVar[Optional[str]] = ContextVar("command", default=None)
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_VARS = {
    "user_id": _user_id,
    "guild_id": _guild_id,
    "channel_id": _channel_id,
    "command": _command,
    "request_id": _request_id,
}


def bind_context(
    *,
    user_id: Optional[int] = None,
    guild_id: Optional[int] = None,
    channel_id: Optional[int] = None,
    command: Optional[str] = None,
    request_id: Optional[str] = None,
) -> None:
    """Bind per-invocation fields so every log line of the command carries them."""
    values = {
        "user_id": user_id,
        "guild_id": guild_id,
        "channel_id": channel_id,
        "command": command,
        "request_id": request_id,
    }
    if request_id is None and _request_id.get() is None:
        values["request_id"] = str(uuid.uuid4())[:8]

    for key, value in values.items():
        if value is not None:
            _VARS[key].set(value)
    structlog.contextvars.bind_contextvars(**get_current_context())


def clear_context() -> None:
    for var in _VARS.values():
        var.set(None)
    structlog.contextvars.clear_contextvars()


def get_current_context() -> Dict[str, Any]:
    return {key: var.get() for key, var in _VARS.items() if var.get() is not None}
