"""
Team Commands Cog

Handles ``create_channels`` and ``remove_channels``. All channel and store
work is delegated to the TeamChannelService; this cog is the only place that
turns its outcomes into replies and log lines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from discord.ext import commands

from helpers.discord_reply import reply
from helpers.error_messages import (
    format_provision_denied,
    format_team_error,
    format_user_error,
    format_user_success,
)
from helpers.permissions_helper import can_provision, can_tear_down
from utils.errors import (
    ChannelCreationError,
    ChannelDeletionError,
    ChannelTypeMismatchError,
    OwnershipCommitError,
    RecordRemovalError,
    TeamChannelError,
)
from utils.log_context import get_context_extra
from utils.logging import get_logger
from utils.types import ProvisionRequest

if TYPE_CHECKING:
    from services.team_channel_service import TeamChannelService

logger = get_logger(__name__)


class TeamCommands(commands.Cog, name="teams"):
    """Team channel management commands."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @property
    def team_service(self) -> TeamChannelService:
        """Get the team channel service from the bot's service container."""
        if not hasattr(self.bot, "services") or self.bot.services is None:
            raise RuntimeError("Bot services not initialized")
        return self.bot.services.team_channels

    @commands.command(name="create_channels")
    async def create_channels(self, ctx: commands.Context, *, game_name: str = "") -> None:
        """Create a category, text channel and voice channel for your game."""
        tokens = tuple(game_name.split())

        if not can_provision(ctx.author):
            logger.info(
                "create_channels refused: missing role",
                extra=get_context_extra(ctx),
            )
            await reply(ctx, format_provision_denied())
            return

        logger.info(
            "Got a request for channels for the game %r",
            " ".join(tokens),
            extra=get_context_extra(ctx),
        )

        request = ProvisionRequest(
            requester=ctx.author.id, raw_name_tokens=tokens, guild=ctx.guild
        )
        try:
            result = await self.team_service.provision(request)
        except TeamChannelError as e:
            _log_team_error(ctx, e, " ".join(tokens))
            await reply(ctx, format_team_error(e))
            return
        except Exception as e:
            logger.exception(
                "Unexpected error in create_channels", exc_info=e, extra=get_context_extra(ctx)
            )
            await reply(ctx, format_user_error("UNKNOWN"))
            return

        logger.info(
            "Created team channels",
            extra=get_context_extra(
                ctx,
                category_id=str(result.category_id),
                display_name=result.display_name,
            ),
        )
        await reply(
            ctx,
            format_user_success(
                "CREATED",
                display_name=result.display_name,
                channel_mention=result.text_channel_mention,
            ),
        )

    @commands.command(name="remove_channels")
    async def remove_channels(self, ctx: commands.Context, *, user_id: str = "") -> None:
        """Organizers only: delete a user's team channels."""
        if not can_tear_down(ctx.author):
            logger.info(
                "remove_channels refused: missing role",
                extra=get_context_extra(ctx),
            )
            await reply(ctx, format_user_error("TEARDOWN_DENIED"))
            return

        try:
            record = await self.team_service.teardown(ctx.guild, tuple(user_id.split()))
        except TeamChannelError as e:
            _log_team_error(ctx, e, user_id)
            await reply(ctx, format_team_error(e))
            return
        except Exception as e:
            logger.exception(
                "Unexpected error in remove_channels", exc_info=e, extra=get_context_extra(ctx)
            )
            await reply(ctx, format_user_error("UNKNOWN"))
            return

        logger.info(
            "Removed the channels for team %s.",
            record.display_name,
            extra=get_context_extra(ctx, record=record),
        )
        await reply(ctx, format_user_success("REMOVED", display_name=record.display_name))


def _log_team_error(ctx: commands.Context, error: TeamChannelError, subject: str) -> None:
    """Log a service error at a level matching how much an operator needs to see."""
    if isinstance(error, ChannelTypeMismatchError):
        logger.error(
            "Discord returned %s when asked for a %s channel (channel_id=%s) for %r; "
            "category %s may need manual cleanup",
            error.actual,
            error.expected.value,
            error.channel_id,
            subject,
            error.category_id,
            extra=get_context_extra(
                ctx, category_id=str(error.category_id), display_name=subject
            ),
        )
    elif isinstance(error, ChannelCreationError):
        logger.error(
            "Channel creation failed for %r at the %s step; category %s may need "
            "manual cleanup",
            subject,
            error.kind.value,
            error.category_id,
            exc_info=error.cause,
            extra=get_context_extra(
                ctx, category_id=str(error.category_id), display_name=subject
            ),
        )
    elif isinstance(error, OwnershipCommitError):
        logger.error(
            "Channels for %r exist under category %s but ownership was not saved",
            subject,
            error.category_id,
            exc_info=error.cause,
            extra=get_context_extra(ctx, category_id=str(error.category_id)),
        )
    elif isinstance(error, (ChannelDeletionError, RecordRemovalError)):
        logger.error(
            "Removing team %s (category %s) failed: %s",
            error.record.display_name,
            error.record.category_id,
            error,
            exc_info=error.cause,
            extra=get_context_extra(ctx, record=error.record),
        )
    else:
        logger.info(
            "%s refused: %s",
            ctx.command.qualified_name if ctx.command else "command",
            error,
            extra=get_context_extra(ctx),
        )


async def setup(bot: commands.Bot) -> None:
    """Set up the Team Commands cog."""
    await bot.add_cog(TeamCommands(bot))
