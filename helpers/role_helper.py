"""
Role lookups and self-service role changes.

``has_role`` is the only question the access gate asks Discord. The
``~role`` / ``~leave`` commands use ``find_self_assignable_role`` to resolve a
typed role name against the guild's roles and the configured allow list.
"""

from __future__ import annotations

from collections.abc import Iterable

import discord

from helpers.discord_api import add_roles, remove_roles
from utils.logging import get_logger

__all__ = [
    "find_self_assignable_role",
    "has_role",
    "join_role",
    "leave_role",
]

logger = get_logger(__name__)


def has_role(member: discord.Member, role_name: str) -> bool:
    """True if ``member`` holds a role named exactly ``role_name``."""
    return any(role.name == role_name for role in getattr(member, "roles", []))


def find_self_assignable_role(
    guild: discord.Guild, requested: str, allowed: Iterable[str]
) -> discord.Role | None:
    """Resolve ``requested`` (case-insensitive) to a guild role on the allow list."""
    wanted = requested.strip().lower()
    if not wanted:
        return None
    allowed_lower = {name.lower() for name in allowed}
    if wanted not in allowed_lower:
        return None
    for role in guild.roles:
        if role.name.lower() == wanted:
            return role
    return None


async def join_role(member: discord.Member, role: discord.Role) -> bool:
    """Give ``role`` to ``member``; False if Discord refused."""
    try:
        await add_roles(member, role, reason="Self-assigned with ~role")
    except discord.HTTPException as e:
        logger.exception(
            "Couldn't assign role %s to %s: %s",
            role.name,
            member.id,
            e,
            extra={"user_id": str(member.id), "guild_id": str(member.guild.id)},
        )
        return False
    logger.info(
        "New role %s assigned to %s",
        role.name,
        member.id,
        extra={"user_id": str(member.id), "guild_id": str(member.guild.id)},
    )
    return True


async def leave_role(member: discord.Member, role: discord.Role) -> bool:
    """Take ``role`` from ``member``; False if Discord refused."""
    try:
        await remove_roles(member, role, reason="Self-removed with ~leave")
    except discord.HTTPException as e:
        logger.exception(
            "Couldn't remove role %s from %s: %s",
            role.name,
            member.id,
            e,
            extra={"user_id": str(member.id), "guild_id": str(member.guild.id)},
        )
        return False
    logger.info(
        "%s left the role %s",
        member.id,
        role.name,
        extra={"user_id": str(member.id), "guild_id": str(member.guild.id)},
    )
    return True
