"""
Team Channel Service

Creates and removes the category + text + voice channel set a jam team works
in, keeping the ownership store consistent with what exists on Discord.

Creation is fail-fast without rollback: if the text or voice channel cannot be
created, the channels already made stay on Discord and no ownership record is
written. The raised error carries the category id so an organizer can clean up
by hand.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

import discord

from helpers.discord_api import create_guild_channel, delete_channel, is_channel_kind
from helpers.name_sanitizer import join_name, sanitize
from utils.errors import (
    AlreadyOwnedError,
    CategoryCreationFailed,
    CategoryTypeMismatch,
    ChannelCreationError,
    ChannelDeletionError,
    ChannelTypeMismatchError,
    InvalidUserIdError,
    MissingUserIdError,
    OwnershipCommitError,
    RecordRemovalError,
    StoreError,
    TeamNotFoundError,
    TextCreationFailed,
    TextTypeMismatch,
    VoiceCreationFailed,
    VoiceTypeMismatch,
)
from utils.types import (
    ChannelKind,
    OwnershipRecord,
    ProvisionedChannelSet,
    ProvisionRequest,
    UserId,
)

from .base import BaseService
from .ownership_store import OwnershipStore

CATEGORY_PREFIX = "Team: "
TEXT_TOPIC_TEMPLATE = "Work on and playtesting of the game {name}."

# Discord snowflakes are unsigned 64-bit integers
_USER_ID_RE = re.compile(r"[0-9]{1,20}")
_MAX_SNOWFLAKE = 2**64 - 1

# Remote failures: API errors plus transport errors discord.py lets through
REMOTE_ERRORS = (discord.DiscordException, OSError)


def parse_user_id(tokens: Sequence[str]) -> UserId:
    """Parse the single numeric token of ``remove_channels``.

    Raises:
        MissingUserIdError: No token given.
        InvalidUserIdError: More than one token, or not a valid snowflake.
    """
    if not tokens:
        raise MissingUserIdError("no user id given")
    if len(tokens) != 1 or not _USER_ID_RE.fullmatch(tokens[0]):
        raise InvalidUserIdError(f"invalid user id {' '.join(tokens)!r}")
    user_id = int(tokens[0])
    if user_id > _MAX_SNOWFLAKE:
        raise InvalidUserIdError(f"user id {user_id} out of range")
    return user_id


class TeamChannelService(BaseService):
    """Provision and tear down team channel sets."""

    def __init__(self, store: OwnershipStore) -> None:
        super().__init__("team_channels")
        self.store = store

    async def _initialize_impl(self) -> None:
        await self.store.initialize()

    async def _shutdown_impl(self) -> None:
        await self.store.shutdown()

    # ------------------------------------------------------------------
    # Provisioning
    # ------------------------------------------------------------------

    async def provision(self, request: ProvisionRequest) -> ProvisionedChannelSet:
        """
        Create the category, text and voice channel for ``request.requester``.

        The requester's lock is held for the whole sequence so a second request
        from the same user waits, then sees the committed record.

        Raises:
            AlreadyOwnedError: The requester already has a channel set. No
                Discord calls are made.
            EmptyGameNameError: No name words were given.
            ForbiddenCharacterError: The name contains a backtick.
            ChannelCreationError: Discord rejected one of the three creations.
            ChannelTypeMismatchError: Discord created the wrong kind of channel.
            OwnershipCommitError: Channels exist but the record was not saved.
        """
        self._ensure_initialized()

        async with self.store.owner_lock(request.requester):
            existing = self.store.get(request.requester)
            if existing is not None:
                raise AlreadyOwnedError(existing)

            display_name = sanitize(request.raw_name_tokens)
            game_name = join_name(request.raw_name_tokens)
            guild = request.guild
            reason = f"Team channels requested by {request.requester}"

            category = await self._create_channel(
                guild,
                CATEGORY_PREFIX + game_name,
                ChannelKind.CATEGORY,
                CategoryCreationFailed,
                CategoryTypeMismatch,
                reason=reason,
            )
            text = await self._create_channel(
                guild,
                game_name,
                ChannelKind.TEXT,
                TextCreationFailed,
                TextTypeMismatch,
                parent=category,
                topic=TEXT_TOPIC_TEMPLATE.format(name=game_name),
                reason=reason,
            )
            await self._create_channel(
                guild,
                game_name,
                ChannelKind.VOICE,
                VoiceCreationFailed,
                VoiceTypeMismatch,
                parent=category,
                reason=reason,
            )

            record = OwnershipRecord(
                owner=request.requester,
                display_name=display_name,
                category_id=category.id,
                text_channel_id=text.id,
            )
            try:
                await self.store.insert(record)
            except StoreError as e:
                raise OwnershipCommitError(category.id, e) from e

        return ProvisionedChannelSet(
            display_name=display_name,
            category_id=category.id,
            text_channel_id=text.id,
        )

    async def _create_channel(
        self,
        guild: discord.Guild,
        name: str,
        kind: ChannelKind,
        failure_cls: type[ChannelCreationError],
        mismatch_cls: type[ChannelTypeMismatchError],
        *,
        parent: discord.CategoryChannel | None = None,
        topic: str | None = None,
        reason: str | None = None,
    ) -> discord.abc.GuildChannel:
        category_id = parent.id if parent is not None else None
        try:
            channel = await create_guild_channel(
                guild, name, kind, parent=parent, topic=topic, reason=reason
            )
        except REMOTE_ERRORS as e:
            raise failure_cls(kind, e, category_id=category_id) from e

        if not is_channel_kind(channel, kind):
            channel_id = getattr(channel, "id", None)
            raise mismatch_cls(
                kind,
                type(channel).__name__,
                channel_id=channel_id,
                category_id=category_id if category_id is not None else channel_id,
            )
        return channel

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    async def teardown(
        self, guild: discord.Guild, target_tokens: Sequence[str]
    ) -> OwnershipRecord:
        """
        Delete the target user's category (Discord removes its children) and
        forget their ownership record.

        The record is dropped only after Discord confirms the deletion, so a
        failed call can simply be repeated. A category that is already gone
        counts as deleted.

        Raises:
            InvalidUserIdError: ``target_tokens`` is not one numeric id. Raised
                before the store or Discord is touched.
            TeamNotFoundError: The user owns no channel set.
            ChannelDeletionError: Discord refused the deletion; record kept.
            RecordRemovalError: Category deleted but the store write failed.
        """
        self._ensure_initialized()
        user_id = parse_user_id(target_tokens)

        async with self.store.owner_lock(user_id):
            record = self.store.get(user_id)
            if record is None:
                raise TeamNotFoundError(user_id)

            try:
                await delete_channel(
                    guild,
                    record.category_id,
                    reason=f"Team channels for {record.display_name} removed",
                )
            except discord.NotFound:
                self.logger.warning(
                    "Category %s for team %s was already deleted",
                    record.category_id,
                    record.display_name,
                    extra={
                        "user_id": str(user_id),
                        "category_id": str(record.category_id),
                    },
                )
            except REMOTE_ERRORS as e:
                raise ChannelDeletionError(record, e) from e

            try:
                await self.store.remove(user_id)
            except StoreError as e:
                raise RecordRemovalError(record, e) from e

        return record
