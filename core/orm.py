import os
from typing import Optional

from tortoise import Tortoise

from configs.settings import DATABASE_URL
from core.logging import get_logger

logger = get_logger("core_orm")

MODEL_MODULES = ["cogs.signup.models"]


async def init_tortoise(db_url: Optional[str] = None, generate_schemas: bool = True):
    """Initialize Tortoise ORM connection.

    Errors propagate: the bot cannot serve list commands without storage.
    """
    db_url = db_url or DATABASE_URL
    if db_url.startswith("sqlite://") and db_url != "sqlite://:memory:":
        os.makedirs(os.path.dirname(os.path.abspath(db_url[len("sqlite://"):])), exist_ok=True)

    logger.info("tortoise_connecting", backend=db_url.split("://", 1)[0])
    await Tortoise.init(
        db_url=db_url,
        modules={"models": MODEL_MODULES},
        use_tz=True,
        timezone="UTC",
    )
    if generate_schemas:
        # safe=True only creates missing tables
        await Tortoise.generate_schemas(safe=True)
    logger.info("tortoise_connected")


async def close_tortoise():
    """Close Tortoise ORM connection"""
    await Tortoise.close_connections()
    logger.info("tortoise_disconnected")
