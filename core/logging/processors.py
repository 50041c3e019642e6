import re
from typing import Any, Dict
import structlog

# Discord bot tokens start with M/N followed by base64-ish segments
TOKEN_PATTERN = re.compile(r'[NM][A-Za-z0-9._-]{20,}')
SENSITIVE_KEYS = frozenset({'token', 'password', 'secret', 'api_key', 'authorization'})
SERVICE_NAME = "rosterbot"


def redact_sensitive_data(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: Dict[str, Any],
) -> Dict[str, Any]:
    for key, value in list(event_dict.items()):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = '[REDACTED]'
        elif isinstance(value, str):
            event_dict[key] = TOKEN_PATTERN.sub('[REDACTED]', value)
    return event_dict


def add_service_context(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: Dict[str, Any],
) -> Dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict
