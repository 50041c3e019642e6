"""
Tests for the flag-reaction translation client and cog.

HTTP and Discord objects are mocked; no network access.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from core.errors import UpstreamServiceError
from cogs.translate.client import TranslationClient
from cogs.translate.cog import TranslateCog


def make_session(status=200, json_data=None, text="", exc=None):
    resp = MagicMock()
    resp.status = status
    resp.json = AsyncMock(return_value=json_data)
    resp.text = AsyncMock(return_value=text)

    cm = MagicMock()
    cm.__aenter__ = AsyncMock(return_value=resp)
    cm.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    if exc is not None:
        session.post = MagicMock(side_effect=exc)
    else:
        session.post = MagicMock(return_value=cm)
    return session


# =============================================================================
# TranslationClient
# =============================================================================

class TestTranslationClient:

    @pytest.mark.asyncio
    async def test_returns_translated_text(self):
        session = make_session(json_data={"translatedText": "Olá"})
        client = TranslationClient("https://tr.example/translate", api_key="k", session=session)

        assert await client.translate("Hello", "pt") == "Olá"

        payload = session.post.call_args.kwargs["json"]
        assert payload == {"q": "Hello", "source": "auto", "target": "pt", "format": "text", "api_key": "k"}

    @pytest.mark.asyncio
    async def test_non_200_raises_upstream_error(self):
        session = make_session(status=429, text="Too many requests")
        client = TranslationClient("https://tr.example/translate", session=session)

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.translate("Hello", "pt")
        assert "429" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_network_error_raises_upstream_error(self):
        session = make_session(exc=aiohttp.ClientConnectionError("down"))
        client = TranslationClient("https://tr.example/translate", session=session)

        with pytest.raises(UpstreamServiceError):
            await client.translate("Hello", "pt")

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_error(self):
        session = make_session(exc=asyncio.TimeoutError())
        client = TranslationClient("https://tr.example/translate", session=session)

        with pytest.raises(UpstreamServiceError):
            await client.translate("Hello", "pt")

    @pytest.mark.asyncio
    async def test_missing_field_raises_upstream_error(self):
        session = make_session(json_data={"error": "bad"})
        client = TranslationClient("https://tr.example/translate", session=session)

        with pytest.raises(UpstreamServiceError):
            await client.translate("Hello", "pt")

    @pytest.mark.asyncio
    async def test_does_not_close_injected_session(self):
        session = make_session(json_data={"translatedText": "x"})
        client = TranslationClient("https://tr.example/translate", session=session)

        await client.close()

        session.close.assert_not_awaited()


# =============================================================================
# TranslateCog
# =============================================================================

@pytest.fixture
def message():
    msg = MagicMock()
    msg.id = 42
    msg.content = "Good morning"
    msg.author.bot = False
    msg.author.display_name = "Alice"
    msg.author.display_avatar.url = "https://cdn.example/a.png"
    msg.reply = AsyncMock()
    return msg


@pytest.fixture
def channel(message):
    ch = MagicMock()
    ch.fetch_message = AsyncMock(return_value=message)
    ch.send = AsyncMock()
    return ch


@pytest.fixture
def translate_bot(mock_bot, channel):
    mock_bot.get_channel.return_value = channel
    return mock_bot


def make_payload(emoji="🇧🇷", user_id=222222222):
    payload = MagicMock()
    payload.emoji = emoji
    payload.user_id = user_id
    payload.message_id = 42
    payload.channel_id = 444444444
    payload.guild_id = 987654321
    return payload


class TestTranslateCog:

    @pytest.mark.asyncio
    async def test_flag_reaction_replies_with_translation(self, translate_bot, message):
        client = MagicMock()
        client.translate = AsyncMock(return_value="Bom dia")
        cog = TranslateCog(translate_bot, client)

        await cog.on_raw_reaction_add(make_payload("🇧🇷"))

        client.translate.assert_awaited_once_with("Good morning", "pt")
        embed = message.reply.call_args.kwargs["embed"]
        assert embed.description == "Bom dia"
        assert "Portuguese" in embed.footer.text

    @pytest.mark.asyncio
    async def test_same_language_translated_once(self, translate_bot, message):
        client = MagicMock()
        client.translate = AsyncMock(return_value="Bom dia")
        cog = TranslateCog(translate_bot, client)

        await cog.on_raw_reaction_add(make_payload("🇧🇷"))
        await cog.on_raw_reaction_add(make_payload("🇵🇹", user_id=5))

        assert client.translate.await_count == 1

    @pytest.mark.asyncio
    async def test_ignores_non_flag_emoji(self, translate_bot):
        client = MagicMock()
        client.translate = AsyncMock()
        cog = TranslateCog(translate_bot, client)

        await cog.on_raw_reaction_add(make_payload("👍"))

        client.translate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ignores_bot_messages(self, translate_bot, message):
        message.author.bot = True
        client = MagicMock()
        client.translate = AsyncMock()
        cog = TranslateCog(translate_bot, client)

        await cog.on_raw_reaction_add(make_payload())

        client.translate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upstream_failure_is_reported_and_retryable(self, translate_bot, channel, message):
        client = MagicMock()
        client.translate = AsyncMock(side_effect=UpstreamServiceError("Translation service", "HTTP 500"))
        cog = TranslateCog(translate_bot, client)

        await cog.on_raw_reaction_add(make_payload())

        channel.send.assert_awaited_once()
        message.reply.assert_not_awaited()

        client.translate.side_effect = None
        client.translate.return_value = "Bom dia"
        await cog.on_raw_reaction_add(make_payload())
        message.reply.assert_awaited_once()
