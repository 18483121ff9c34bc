"""
Centralized Discord reply helpers for consistent message delivery.

Every command produces exactly one reply. In a guild channel the reply
mentions the author; in a DM it is sent as-is. Only the author is pinged:
role and @everyone mentions typed into game names stay inert.

Failures to deliver are logged, never raised, so a broken reply cannot undo
work a command has already committed.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from utils.logging import get_logger

logger = get_logger(__name__)

REPLY_MENTIONS = discord.AllowedMentions(users=True, roles=False, everyone=False)


def _with_mention(author: discord.abc.User, text: str, in_guild: bool) -> str:
    return f"{author.mention} {text}" if in_guild else text


async def reply(ctx: commands.Context, text: str) -> discord.Message | None:
    """
    Answer a prefix command in the channel it was sent from.

    Args:
        ctx: Command context
        text: Rendered message text

    Returns:
        The sent message, or None if sending failed

    Example:
        await reply(ctx, format_user_error("NO_NAME"))
    """
    content = _with_mention(ctx.author, text, ctx.guild is not None)
    try:
        return await ctx.send(content, allowed_mentions=REPLY_MENTIONS)
    except discord.Forbidden:
        logger.warning(
            "Missing permission to reply in channel %s",
            getattr(ctx.channel, "id", None),
        )
    except discord.HTTPException as e:
        logger.exception(f"Failed to send reply: {e}")
    return None


async def reply_to_message(message: discord.Message, text: str) -> bool:
    """
    Answer a plain (non-command) message, e.g. a theme idea sent by DM.

    Returns:
        True if the reply was delivered, False otherwise
    """
    content = _with_mention(message.author, text, message.guild is not None)
    try:
        await message.channel.send(content, allowed_mentions=REPLY_MENTIONS)
        return True
    except discord.Forbidden:
        logger.debug(
            f"Cannot reply to {message.author} (DMs disabled or bot blocked)"
        )
        return False
    except discord.HTTPException as e:
        logger.warning(f"Failed to reply to {message.author}: {e}")
        return False
