"""Flag-reaction translation.

React to a message with a country flag and the bot replies with the message
translated into that country's language.
"""

from configs.settings import TRANSLATE_API_URL, TRANSLATE_API_KEY, TRANSLATE_TIMEOUT
from .client import TranslationClient
from .cog import TranslateCog


async def setup(bot):
    client = TranslationClient(TRANSLATE_API_URL, api_key=TRANSLATE_API_KEY, timeout=TRANSLATE_TIMEOUT)
    await bot.add_cog(TranslateCog(bot, client))
