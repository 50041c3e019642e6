import asyncio
from datetime import datetime, timedelta
from typing import Optional

import discord
from discord.ext import commands

from core.logging import get_logger

logger = get_logger("core_errors")


def format_duration(delta: timedelta) -> str:
    """Render a timedelta as a short human string, e.g. ``6d 23h 59m``."""
    total = max(int(delta.total_seconds()), 0)
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, seconds = divmod(rem, 60)
    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


class UserFeedbackError(commands.CommandError):
    """Exception for user-facing errors that should be displayed nicely."""
    def __init__(self, message, *args):
        self.message = message
        super().__init__(message, *args)


class InvalidListReference(UserFeedbackError):
    def __init__(self, list_id: str, discovery_command: str = "!list lists"):
        self.list_id = list_id
        super().__init__(
            f"❌ There is no list with id `{list_id}`. Use `{discovery_command}` to see the valid lists."
        )


class Unauthorized(UserFeedbackError, commands.CheckFailure):
    def __init__(self, message: str = "⛔ You are not allowed to use this command."):
        super().__init__(message)


class AlreadyMember(UserFeedbackError):
    def __init__(self, user_id: int, list_name: str):
        self.user_id = user_id
        self.list_name = list_name
        super().__init__(f"⚠️ <@{user_id}> is already on **{list_name}**.")


class NotAMember(UserFeedbackError):
    def __init__(self, user_id: int, list_name: str):
        self.user_id = user_id
        self.list_name = list_name
        super().__init__(f"⚠️ <@{user_id}> is not on **{list_name}**.")


class ActiveCooldown(UserFeedbackError):
    def __init__(self, user_id: int, list_name: str, expires_at: datetime, remaining: timedelta):
        self.user_id = user_id
        self.list_name = list_name
        self.expires_at = expires_at
        self.remaining = remaining
        super().__init__(
            f"⏳ <@{user_id}> is on cooldown for **{list_name}** for another "
            f"**{format_duration(remaining)}** (until {discord.utils.format_dt(expires_at, 'F')})."
        )


class CooldownNotFound(UserFeedbackError):
    def __init__(self, user_id: int, list_name: str):
        self.user_id = user_id
        self.list_name = list_name
        super().__init__(f"ℹ️ No cooldown found for <@{user_id}> on **{list_name}**.")


class StorageUnavailable(UserFeedbackError):
    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        super().__init__("⚠️ The database is unavailable right now, please try again in a moment.")


class UpstreamServiceError(UserFeedbackError):
    def __init__(self, service: str, detail: str = ""):
        self.service = service
        self.detail = detail
        super().__init__(f"⚠️ {service} is not responding right now, please try again later.")


class ErrorHandler(commands.Cog):
    """Global Error Handler to catch and process command errors."""

    def __init__(self, bot):
        self.bot = bot

    @staticmethod
    def _finish_timer(ctx: commands.Context, error: BaseException) -> None:
        timer = getattr(ctx, "command_timer", None)
        if timer is not None:
            timer.finish(error=type(error).__name__)

    @commands.Cog.listener()
    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError):
        """The event triggered when an error is raised while invoking a command."""

        # If command has its own error handler, ignore global one
        if ctx.command is not None and ctx.command.has_error_handler():
            return

        error = getattr(error, 'original', error)
        self._finish_timer(ctx, error)

        if isinstance(error, (commands.CommandNotFound, commands.NotOwner)):
            return

        # Domain errors carry their own message
        if isinstance(error, UserFeedbackError):
            if isinstance(error, StorageUnavailable):
                logger.error("storage_unavailable", operation=error.operation, cause=repr(error.cause))
            elif isinstance(error, UpstreamServiceError):
                logger.warning("upstream_error", service=error.service, detail=error.detail)
            await ctx.send(error.message)
            return

        if isinstance(error, commands.DisabledCommand):
            await ctx.send(f"⚠️ `{ctx.command}` is disabled.")
            return

        if isinstance(error, commands.NoPrivateMessage):
            await ctx.send("🏠 This command can only be used in a server.")
            return

        if isinstance(error, commands.CheckFailure):
            await ctx.send("⛔ You are not allowed to use this command.")
            return

        if isinstance(error, (commands.BadArgument, commands.MissingRequiredArgument)):
            usage = f"{ctx.prefix}{ctx.command.qualified_name} {ctx.command.signature}".strip()
            await ctx.send(f"❌ Invalid arguments.\nUsage: `{usage}`")
            return

        if isinstance(error, asyncio.TimeoutError):
            logger.error("command_timeout", command=str(ctx.command))
            await ctx.send(f"⚠️ `{ctx.command}` timed out.", delete_after=10)
            return

        logger.error("command_failed", command=str(ctx.command), exc_info=error)

        try:
            embed = discord.Embed(
                title="❌ Unexpected error",
                description="Something went wrong while running this command. It has been logged.",
                color=discord.Color.red()
            )
            await ctx.send(embed=embed)
        except discord.HTTPException:
            pass  # Cannot send message, ignore


async def setup(bot):
    await bot.add_cog(ErrorHandler(bot))
