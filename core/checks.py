import discord
from discord.ext import commands

from configs.settings import OWNER_ID, ADMIN_IDS
from core.errors import Unauthorized


def is_privileged(user: discord.abc.User) -> bool:
    """Bot owner, configured bot admin, or a guild member with Administrator."""
    if user.id == OWNER_ID or user.id in ADMIN_IDS:
        return True
    permissions = getattr(user, "guild_permissions", None)
    return bool(permissions and permissions.administrator)


def is_admin():
    """Decorator rejecting non-privileged actors before the command body runs."""
    async def predicate(ctx):
        if is_privileged(ctx.author):
            return True
        raise Unauthorized()
    return commands.check(predicate)
