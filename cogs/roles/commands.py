"""
Role Commands Cog

``~role <name>`` joins and ``~leave <name>`` leaves one of the roles listed
under ``roles.self_assignable`` in the config.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from config.config_loader import ConfigLoader
from helpers.discord_reply import reply
from helpers.error_messages import format_user_error, format_user_success
from helpers.role_helper import find_self_assignable_role, join_role, leave_role
from utils.log_context import get_context_extra
from utils.logging import get_logger

logger = get_logger(__name__)


class RoleCommands(commands.Cog, name="roles"):
    """Self-service jam roles."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    async def _resolve(self, ctx: commands.Context, role_name: str) -> discord.Role | None:
        allowed = ConfigLoader.get_self_assignable_roles()
        role = None
        if ctx.guild is not None and isinstance(ctx.author, discord.Member):
            role = find_self_assignable_role(ctx.guild, role_name, allowed)
        if role is None:
            logger.info(
                "Unknown self-assignable role %r", role_name, extra=get_context_extra(ctx)
            )
            await reply(ctx, format_user_error("ROLE_UNKNOWN", roles="\n".join(allowed)))
        return role

    @commands.command(name="role")
    async def role(self, ctx: commands.Context, *, role_name: str = "") -> None:
        """Get a jam role."""
        role = await self._resolve(ctx, role_name)
        if role is None:
            return
        if await join_role(ctx.author, role):
            await reply(ctx, format_user_success("ROLE_ASSIGNED"))
        else:
            await reply(ctx, format_user_error("ROLE_FAILED"))

    @commands.command(name="leave")
    async def leave(self, ctx: commands.Context, *, role_name: str = "") -> None:
        """Leave a jam role."""
        role = await self._resolve(ctx, role_name)
        if role is None:
            return
        if await leave_role(ctx.author, role):
            await reply(ctx, format_user_success("ROLE_REMOVED"))
        else:
            await reply(ctx, format_user_error("ROLE_FAILED"))


async def setup(bot: commands.Bot) -> None:
    """Set up the Role Commands cog."""
    await bot.add_cog(RoleCommands(bot))
