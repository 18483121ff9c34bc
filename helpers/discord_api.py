"""
Centralized module for the Discord API calls that change guild state.

Every call passes through one shared rate limiter. Nothing here retries or
swallows errors: discord.py exceptions reach the caller, which decides how to
report them.
"""

import discord
from aiolimiter import AsyncLimiter

from utils.logging import get_logger
from utils.types import ChannelKind

logger = get_logger(__name__)

api_limiter = AsyncLimiter(max_rate=45, time_period=1)

EXPECTED_CHANNEL_TYPES: dict[ChannelKind, type] = {
    ChannelKind.CATEGORY: discord.CategoryChannel,
    ChannelKind.TEXT: discord.TextChannel,
    ChannelKind.VOICE: discord.VoiceChannel,
}


async def create_guild_channel(
    guild: discord.Guild,
    name: str,
    kind: ChannelKind,
    *,
    parent: discord.CategoryChannel | None = None,
    topic: str | None = None,
    reason: str | None = None,
) -> discord.abc.GuildChannel:
    """Create one channel of ``kind``. The returned object is not type-checked here."""
    kwargs: dict = {}
    if reason:
        kwargs["reason"] = reason
    if parent is not None and kind is not ChannelKind.CATEGORY:
        kwargs["category"] = parent

    async with api_limiter:
        if kind is ChannelKind.CATEGORY:
            channel = await guild.create_category(name, **kwargs)
        elif kind is ChannelKind.TEXT:
            if topic:
                kwargs["topic"] = topic
            channel = await guild.create_text_channel(name, **kwargs)
        else:
            channel = await guild.create_voice_channel(name, **kwargs)

    logger.debug(
        "Created %s channel %r",
        kind.value,
        name,
        extra={"guild_id": str(guild.id), "channel_id": str(getattr(channel, "id", ""))},
    )
    return channel


def is_channel_kind(channel: object, kind: ChannelKind) -> bool:
    return isinstance(channel, EXPECTED_CHANNEL_TYPES[kind])


async def delete_channel(
    guild: discord.Guild, channel_id: int, *, reason: str | None = None
) -> None:
    """Delete a channel by id. Deleting a category lets Discord remove its children.

    Raises:
        discord.NotFound: The channel no longer exists.
        discord.HTTPException: Any other API failure.
    """
    channel = guild.get_channel(channel_id)
    async with api_limiter:
        if channel is None:
            channel = await guild.fetch_channel(channel_id)
        await channel.delete(reason=reason)
    logger.info(
        "Deleted channel %s",
        channel_id,
        extra={"guild_id": str(guild.id), "channel_id": str(channel_id)},
    )


async def add_roles(member: discord.Member, *roles: discord.Role, reason: str | None = None) -> None:
    async with api_limiter:
        await member.add_roles(*roles, reason=reason)
    logger.debug(
        "Added roles %s", [r.id for r in roles], extra={"user_id": str(member.id)}
    )


async def remove_roles(
    member: discord.Member, *roles: discord.Role, reason: str | None = None
) -> None:
    async with api_limiter:
        await member.remove_roles(*roles, reason=reason)
    logger.debug(
        "Removed roles %s", [r.id for r in roles], extra={"user_id": str(member.id)}
    )
