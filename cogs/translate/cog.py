from collections import OrderedDict
from typing import Tuple

import discord
from discord.ext import commands

from core.errors import UpstreamServiceError
from core.logging import bind_context, get_logger
from .client import TranslationClient
from .constants import COLOR_TRANSLATION, FLAG_LANGUAGES, MAX_SOURCE_LENGTH, TRANSLATED_CACHE_SIZE

logger = get_logger("translate_cog")


def create_translation_embed(message: discord.Message, translated: str, flag: str, language: str) -> discord.Embed:
    embed = discord.Embed(description=translated[:4096], color=COLOR_TRANSLATION)
    embed.set_author(name=message.author.display_name, icon_url=message.author.display_avatar.url)
    embed.set_footer(text=f"{flag} Translated to {language}")
    return embed


class TranslateCog(commands.Cog):
    """Translate a message when someone reacts to it with a flag."""

    def __init__(self, bot: commands.Bot, client: TranslationClient):
        self.bot = bot
        self.client = client
        self._translated: "OrderedDict[Tuple[int, str], None]" = OrderedDict()

    async def cog_unload(self):
        await self.client.close()

    def _claim(self, key: Tuple[int, str]) -> bool:
        """Mark (message, language) as handled. False if it already was."""
        if key in self._translated:
            return False
        self._translated[key] = None
        if len(self._translated) > TRANSLATED_CACHE_SIZE:
            self._translated.popitem(last=False)
        return True

    @commands.Cog.listener()
    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent):
        if self.bot.user and payload.user_id == self.bot.user.id:
            return

        flag = str(payload.emoji)
        if flag not in FLAG_LANGUAGES:
            return
        target, language = FLAG_LANGUAGES[flag]

        channel = self.bot.get_channel(payload.channel_id)
        if channel is None:
            return

        key = (payload.message_id, target)
        if not self._claim(key):
            return

        bind_context(user_id=payload.user_id, guild_id=payload.guild_id, channel_id=payload.channel_id)
        try:
            message = await channel.fetch_message(payload.message_id)
        except discord.HTTPException as e:
            logger.warning("translate_fetch_failed", message_id=payload.message_id, error=str(e))
            self._translated.pop(key, None)
            return

        content = message.content.strip()
        if message.author.bot or not content:
            return

        try:
            translated = await self.client.translate(content[:MAX_SOURCE_LENGTH], target)
        except UpstreamServiceError as e:
            logger.warning("translate_failed", target=target, detail=e.detail)
            # Allow a retry with the same flag later
            self._translated.pop(key, None)
            await channel.send(e.message, delete_after=10)
            return

        await message.reply(
            embed=create_translation_embed(message, translated, flag, language),
            mention_author=False,
        )
        logger.info("message_translated", message_id=message.id, target=target)
