"""Status board: one embed per process, edited in place on every refresh."""

from dataclasses import dataclass
from typing import Optional

import discord

from core.errors import StorageUnavailable
from core.logging import get_logger
from .services import SignupService
from .ui.embeds import create_board_embed

logger = get_logger("signup_board")


@dataclass
class BoardState:
    """Where the board lives. Set at startup, updated when a new board
    message is posted, and only forgotten when the process restarts."""
    channel_id: Optional[int] = None
    message_id: Optional[int] = None


class StatusBoard:

    def __init__(self, bot, service: SignupService, state: BoardState):
        self.bot = bot
        self.service = service
        self.state = state

    def _get_channel(self) -> Optional[discord.abc.Messageable]:
        if not self.state.channel_id:
            return None
        return self.bot.get_channel(self.state.channel_id)

    async def post(self, channel: discord.abc.Messageable) -> discord.Message:
        """Post a fresh board in ``channel`` and make it the one future refreshes edit."""
        snapshot = await self.service.snapshot()
        message = await channel.send(embed=create_board_embed(snapshot))
        self.state.channel_id = message.channel.id
        self.state.message_id = message.id
        logger.info("board_posted", channel_id=self.state.channel_id, message_id=self.state.message_id)
        return message

    async def refresh(self) -> bool:
        """Re-render the board. Returns False when there is nothing to refresh
        or the refresh failed; failures are logged, never raised."""
        channel = self._get_channel()
        if channel is None:
            return False

        try:
            snapshot = await self.service.snapshot()
        except StorageUnavailable as e:
            logger.warning("board_refresh_skipped", reason="storage_unavailable", operation=e.operation)
            return False

        embed = create_board_embed(snapshot)
        try:
            if self.state.message_id:
                try:
                    await channel.get_partial_message(self.state.message_id).edit(embed=embed)
                    return True
                except discord.NotFound:
                    logger.info("board_message_missing", message_id=self.state.message_id)
            message = await channel.send(embed=embed)
            self.state.message_id = message.id
            return True
        except discord.HTTPException as e:
            logger.error("board_refresh_failed", channel_id=self.state.channel_id, error=str(e))
            return False
        except Exception:
            # e.g. BOARD_CHANNEL_ID points at a category or forum channel
            logger.error("board_refresh_failed", channel_id=self.state.channel_id, exc_info=True)
            return False
