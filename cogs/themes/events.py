"""
Theme Events Cog

Any direct message to the bot is a theme idea submission. Guild messages are
left to the command router.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from helpers.discord_reply import reply_to_message
from helpers.error_messages import format_user_error, format_user_success
from services.theme_service import is_single_word
from utils.errors import StoreError
from utils.log_context import get_context_extra
from utils.logging import get_logger
from utils.types import ThemeSubmissionResult

logger = get_logger(__name__)


class ThemeEvents(commands.Cog):
    """Receives theme ideas by DM."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @property
    def theme_service(self):
        if not hasattr(self.bot, "services") or self.bot.services is None:
            raise RuntimeError("Bot services not initialized")
        return self.bot.services.themes

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.guild is not None or message.author.bot:
            return
        if self.bot.user is not None and message.author.id == self.bot.user.id:
            return

        if not is_single_word(message.content):
            await reply_to_message(message, format_user_error("THEME_NOT_SINGLE_WORD"))
            return

        try:
            result = await self.theme_service.submit(message.author.id, message.content)
        except StoreError as e:
            logger.exception(
                "Failed to save theme idea", exc_info=e, extra=get_context_extra(message)
            )
            await reply_to_message(message, format_user_error("THEME_SAVE_FAILED"))
            return

        code = "THEME_REPLACED" if result is ThemeSubmissionResult.REPLACED else "THEME_DONE"
        await reply_to_message(message, format_user_success(code))


async def setup(bot: commands.Bot) -> None:
    """Set up the Theme Events cog."""
    await bot.add_cog(ThemeEvents(bot))
