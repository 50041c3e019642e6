import discord
from discord.ext import commands, tasks

from configs.settings import ENFORCEMENT_INTERVAL_SECONDS, BOARD_REFRESH_SECONDS
from core import checks
from core.errors import StorageUnavailable, format_duration
from core.logging import bind_context, get_logger, CommandTimer
from .board import StatusBoard
from .constants import resolve_list
from .context import SignupContext
from .ui.embeds import create_board_embed, create_registry_embed

logger = get_logger("signup_cog")


class SignupCog(commands.Cog):
    """Sign-up lists with per-user cooldowns."""

    def __init__(self, bot: commands.Bot, context: SignupContext):
        self.bot = bot
        self.context = context
        self.service = context.service
        self.board = StatusBoard(bot, context.service, context.board_state)

    async def cog_load(self):
        self.enforce_cooldowns.start()
        self.refresh_board.start()
        logger.info("signup_cog_loaded", board_channel_id=self.context.board_state.channel_id)

    async def cog_unload(self):
        self.enforce_cooldowns.cancel()
        self.refresh_board.cancel()

    async def cog_check(self, ctx: commands.Context) -> bool:
        # Member converters and the Administrator check need a guild.
        # Group-level checks do not reach subcommands, so this lives here.
        if ctx.guild is None:
            raise commands.NoPrivateMessage()
        return True

    async def cog_before_invoke(self, ctx: commands.Context):
        bind_context(
            user_id=ctx.author.id,
            guild_id=ctx.guild.id if ctx.guild else None,
            channel_id=ctx.channel.id,
            command=ctx.command.qualified_name,
        )
        ctx.command_timer = CommandTimer(
            ctx.command.qualified_name,
            ctx.author.id,
            ctx.guild.id if ctx.guild else None,
            ctx.channel.id,
        ).start()

    async def cog_after_invoke(self, ctx: commands.Context):
        # Failed commands are finished by the global error handler
        timer = getattr(ctx, "command_timer", None)
        if timer is not None and not ctx.command_failed:
            timer.finish()

    # ==================== BACKGROUND LOOPS ====================

    @tasks.loop(seconds=ENFORCEMENT_INTERVAL_SECONDS)
    async def enforce_cooldowns(self):
        try:
            removed = await self.context.enforcer.enforce()
            if removed:
                logger.info("enforcement_tick", removed=removed)
                await self.board.refresh()
        except StorageUnavailable as e:
            logger.warning("enforcement_tick_skipped", operation=e.operation)
        except Exception:
            logger.error("enforcement_tick_failed", exc_info=True)

    @enforce_cooldowns.before_loop
    async def before_enforce_cooldowns(self):
        await self.bot.wait_until_ready()

    @tasks.loop(seconds=BOARD_REFRESH_SECONDS)
    async def refresh_board(self):
        try:
            await self.board.refresh()
        except Exception:
            logger.error("board_refresh_loop_failed", exc_info=True)

    @refresh_board.before_loop
    async def before_refresh_board(self):
        await self.bot.wait_until_ready()

    # ==================== COMMANDS ====================

    @commands.group(name="list", invoke_without_command=True, case_insensitive=True)
    async def list_group(self, ctx: commands.Context):
        """Show every list with its members and running cooldowns."""
        snapshot = await self.service.snapshot()
        await ctx.send(embed=create_board_embed(snapshot))

    @list_group.command(name="lists", aliases=["ids"])
    async def list_registry(self, ctx: commands.Context):
        """Show valid list ids."""
        await ctx.send(embed=create_registry_embed(ctx.clean_prefix))

    @list_group.command(name="join")
    async def join(self, ctx: commands.Context, list_id: str):
        """Join a list by id."""
        definition = resolve_list(list_id, ctx.clean_prefix)
        await self.service.join(definition, ctx.author.id)
        await ctx.send(f"✅ {ctx.author.mention} joined **{definition.name}**.")
        await self.board.refresh()

    @list_group.command(name="leave")
    async def leave(self, ctx: commands.Context, list_id: str):
        """Leave a list you joined."""
        definition = resolve_list(list_id, ctx.clean_prefix)
        await self.service.leave(definition, ctx.author.id)
        await ctx.send(f"👋 {ctx.author.mention} left **{definition.name}**.")
        await self.board.refresh()

    @list_group.command(name="remove")
    @checks.is_admin()
    async def remove(self, ctx: commands.Context, member: discord.Member, list_id: str):
        """Remove a member from a list without starting a cooldown."""
        definition = resolve_list(list_id, ctx.clean_prefix)
        await self.service.remove(definition, member.id, actor_id=ctx.author.id)
        await ctx.send(f"🗑️ Removed {member.mention} from **{definition.name}**.")
        await self.board.refresh()

    @list_group.command(name="clear")
    @checks.is_admin()
    async def clear(self, ctx: commands.Context, list_id: str):
        """Remove every member from a list."""
        definition = resolve_list(list_id, ctx.clean_prefix)
        removed = await self.service.clear(definition, actor_id=ctx.author.id)
        await ctx.send(f"🧹 Cleared **{definition.name}** ({removed} removed).")
        await self.board.refresh()

    @list_group.command(name="confirm")
    @checks.is_admin()
    async def confirm(self, ctx: commands.Context, list_id: str, member: discord.Member):
        """Confirm a member: take them off the list and start their cooldown."""
        definition = resolve_list(list_id, ctx.clean_prefix)
        cooldown = await self.service.confirm(definition, member.id, actor_id=ctx.author.id)
        await ctx.send(
            f"✔️ Confirmed {member.mention} on **{definition.name}**. "
            f"Cooldown {format_duration(definition.cooldown)}, "
            f"until {discord.utils.format_dt(cooldown.expires_at, 'F')}."
        )
        await self.board.refresh()

    @list_group.command(name="removecd")
    @checks.is_admin()
    async def removecd(self, ctx: commands.Context, list_id: str, member: discord.Member):
        """Lift a member's cooldown on a list."""
        definition = resolve_list(list_id, ctx.clean_prefix)
        await self.service.remove_cooldown(definition, member.id, actor_id=ctx.author.id)
        await ctx.send(f"♻️ Removed the **{definition.name}** cooldown of {member.mention}.")
        await self.board.refresh()

    @list_group.command(name="board")
    @checks.is_admin()
    async def board_here(self, ctx: commands.Context):
        """Post the auto-refreshing status board in this channel."""
        await self.board.post(ctx.channel)
