"""
Structured ``extra=`` fields for log lines about a command or a team.

Every field is a string so JSON log consumers can match ids without losing
precision on 64-bit snowflakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import discord
from discord.ext import commands

if TYPE_CHECKING:
    from utils.types import OwnershipRecord


def get_context_extra(
    ctx: commands.Context | discord.Message | None = None,
    *,
    record: OwnershipRecord | None = None,
    **additional: Any,
) -> dict[str, Any]:
    """
    Build logging extras from a command context or a plain message.

    ``record`` adds the team's category id and display name; an organizer
    reading the error log needs those to find orphaned channels.

    Examples:
        logger.info("Theme stored", extra=get_context_extra(message))
        logger.error("Removal failed", extra=get_context_extra(ctx, record=err.record))
    """
    extra: dict[str, Any] = {}

    if ctx is not None:
        guild = getattr(ctx, "guild", None)
        author = getattr(ctx, "author", None)
        channel = getattr(ctx, "channel", None)
        command = getattr(ctx, "command", None)

        if guild is not None:
            extra["guild_id"] = str(guild.id)
        if author is not None:
            extra["user_id"] = str(author.id)
        if channel is not None and getattr(channel, "id", None) is not None:
            extra["channel_id"] = str(channel.id)
        if command:
            extra["command_name"] = command.qualified_name

    if record is not None:
        extra["category_id"] = str(record.category_id)
        extra["display_name"] = record.display_name

    extra.update(additional)
    return extra
