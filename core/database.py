"""
Storage error handling shared by the Tortoise repositories.
"""
import asyncio
import functools

from tortoise.exceptions import DBConnectionError, IntegrityError, OperationalError

from core.errors import StorageUnavailable
from core.logging import get_logger

logger = get_logger("core_database")

DB_MAX_RETRIES = 5  # Maximum retry attempts for locked database
DB_RETRY_DELAY = 0.1  # Initial delay between retries (seconds)


def storage_guard(operation: str, max_retries: int = DB_MAX_RETRIES, initial_delay: float = DB_RETRY_DELAY):
    """Decorator turning storage failures into ``StorageUnavailable``.

    SQLite "database is locked" errors are retried with exponential backoff.
    ``IntegrityError`` passes through untouched: callers use it as the
    atomic "already exists" signal.

    Args:
        operation (str): Name reported in logs and on the raised error.
        max_retries (int): Maximum number of attempts for lock errors.
        initial_delay (float): Initial delay in seconds, doubles after each retry.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            delay = initial_delay
            for attempt in range(1, max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except IntegrityError:
                    raise
                except OperationalError as e:
                    if "locked" in str(e).lower() and attempt < max_retries:
                        logger.warning(
                            "db_locked_retry", operation=operation, attempt=attempt, delay=round(delay, 2)
                        )
                        await asyncio.sleep(delay)
                        delay *= 2
                        continue
                    raise StorageUnavailable(operation, e) from e
                except (DBConnectionError, ConnectionError) as e:
                    raise StorageUnavailable(operation, e) from e
        return wrapper
    return decorator
