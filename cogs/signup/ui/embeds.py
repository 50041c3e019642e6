import discord

from core.errors import format_duration
from ..constants import (
    COLOR_BOARD,
    COLOR_INFO,
    EMPTY_LIST_TEXT,
    LIST_DEFINITIONS,
    MAX_FIELD_LENGTH,
)
from ..services import BoardSnapshot, as_utc


def _truncate(text: str, limit: int = MAX_FIELD_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 2] + " …"


def create_board_embed(snapshot: BoardSnapshot) -> discord.Embed:
    """Status board: members and running cooldowns of every list."""
    embed = discord.Embed(
        title="📋 Sign-up Lists",
        description="Join with `!list join <id>`, leave with `!list leave <id>`.",
        color=COLOR_BOARD,
        timestamp=snapshot.generated_at,
    )

    for status in snapshot.lists:
        definition = status.definition
        if status.members:
            lines = [f"{i}. <@{user_id}>" for i, user_id in enumerate(status.members, start=1)]
            value = "\n".join(lines)
        else:
            value = EMPTY_LIST_TEXT

        if status.cooldowns:
            cd_lines = [
                f"⏳ <@{c.user_id}> {discord.utils.format_dt(as_utc(c.expires_at), 'R')}"
                for c in status.cooldowns
            ]
            value += "\n\n**Cooldowns**\n" + "\n".join(cd_lines)

        embed.add_field(
            name=f"`{definition.id}` {definition.name} ({len(status.members)})",
            value=_truncate(value),
            inline=False,
        )

    embed.set_footer(text="Last updated")
    return embed


def create_registry_embed(prefix: str = "!") -> discord.Embed:
    """Valid list ids with their names and cooldowns."""
    embed = discord.Embed(title="🗂️ Available Lists", color=COLOR_INFO)
    lines = [
        f"`{d.id}` **{d.name}** · cooldown {format_duration(d.cooldown)}"
        for d in LIST_DEFINITIONS
    ]
    embed.description = "\n".join(lines)
    embed.set_footer(text=f"Usage: {prefix}list join <id>")
    return embed
