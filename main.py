import asyncio

import discord
from discord.ext import commands

from configs.settings import (
    BOARD_CHANNEL_ID,
    COMMAND_PREFIX,
    DISCORD_TOKEN,
    LOG_LEVEL,
    OWNER_ID,
)
from core.logging import configure_logging, get_logger, shutdown_logging
from core.orm import init_tortoise, close_tortoise
from cogs.signup.context import SignupContext

# 1. SETUP LOGGING
configure_logging(level=LOG_LEVEL)
logger = get_logger("main")

EXTENSIONS = (
    "core.errors",
    "cogs.signup",
    "cogs.translate",
)


class RosterBot(commands.Bot):

    def __init__(self):
        intents = discord.Intents.default()
        intents.message_content = True  # prefix commands and message translation
        intents.members = True  # mention -> Member conversion
        super().__init__(
            command_prefix=COMMAND_PREFIX,
            intents=intents,
            case_insensitive=True,
            owner_id=OWNER_ID or None,
            heartbeat_timeout=90.0,
        )
        # Process-wide state, lives until restart
        self.signup_context = SignupContext.create(board_channel_id=BOARD_CHANNEL_ID)

    async def setup_hook(self):
        await init_tortoise()
        for extension in EXTENSIONS:
            await self.load_extension(extension)
            logger.info("extension_loaded", extension=extension)

    async def close(self):
        await super().close()
        await close_tortoise()

    async def on_ready(self):
        logger.info("bot_ready", user=str(self.user), user_id=self.user.id, guilds=len(self.guilds))
        await self.change_presence(activity=discord.Game(name=f"{COMMAND_PREFIX}list"))


async def main():
    if not DISCORD_TOKEN:
        logger.error("DISCORD_TOKEN is not set")
        return

    bot = RosterBot()
    async with bot:
        await bot.start(DISCORD_TOKEN)


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
    finally:
        shutdown_logging()
