"""Sign-up lists package.

Users join fixed lists; an admin "confirm" evicts them and starts a per-list
cooldown during which they cannot re-join.

Components:
- constants: list registry
- models: Tortoise models for memberships and cooldowns
- repositories: membership and cooldown stores
- services: join/leave/confirm rules and the enforcement pass
- board: auto-refreshing status embed
- cog: prefix commands and background loops
"""

from configs.settings import BOARD_CHANNEL_ID
from .cog import SignupCog
from .context import SignupContext


async def setup(bot):
    """Load the Signup cog, reusing the context created at startup if any."""
    context = getattr(bot, "signup_context", None)
    if context is None:
        context = SignupContext.create(board_channel_id=BOARD_CHANNEL_ID)
        bot.signup_context = context
    await bot.add_cog(SignupCog(bot, context))
