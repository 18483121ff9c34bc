"""
General Commands Cog

``~help``, a help reply when the bot is mentioned, and the reply for an
unknown ``~`` command.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from helpers.discord_reply import reply, reply_to_message
from helpers.error_messages import format_user_error, format_user_success
from utils.log_context import get_context_extra
from utils.logging import get_logger

logger = get_logger(__name__)


def help_text(prefix: str) -> str:
    return format_user_success("HELP", prefix=prefix)


class GeneralCommands(commands.Cog, name="general"):
    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @commands.command(name="help")
    async def help(self, ctx: commands.Context) -> None:
        """Explain what the bot does."""
        await reply(ctx, help_text(ctx.clean_prefix))

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.guild is None or message.author.bot or self.bot.user is None:
            return
        if not any(user.id == self.bot.user.id for user in message.mentions):
            return
        ctx = await self.bot.get_context(message)
        if ctx.valid:
            return
        await reply_to_message(message, help_text(ctx.clean_prefix or "~"))

    @commands.Cog.listener()
    async def on_command_error(
        self, ctx: commands.Context, error: commands.CommandError
    ) -> None:
        if not isinstance(error, commands.CommandNotFound):
            return
        logger.debug("Unrecognised command %r", ctx.invoked_with, extra=get_context_extra(ctx))
        await reply(
            ctx,
            format_user_error("UNRECOGNISED_COMMAND") + "\n" + help_text(ctx.clean_prefix),
        )


async def setup(bot: commands.Bot) -> None:
    """Set up the General Commands cog."""
    await bot.add_cog(GeneralCommands(bot))
