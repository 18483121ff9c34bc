"""
Custom exception classes for the Discord bot.

These provide a hierarchy of typed exceptions for better error handling.
Team-channel errors carry a ``code`` that ``helpers.error_messages`` maps to a
user-facing reply; the exception itself never formats text for Discord.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from utils.types import ChannelKind, OwnershipRecord


class BotError(Exception):
    """Base exception for bot-related errors."""

    pass


class ConfigError(BotError):
    """Exception raised for configuration-related errors."""

    pass


class StoreError(BotError):
    """Exception raised when a persisted store cannot be written."""

    pass


class TeamChannelError(BotError):
    """Base exception for team channel provisioning and teardown."""

    code = "UNKNOWN"

    def format_kwargs(self) -> dict[str, object]:
        """Values substituted into the user-facing message for ``code``."""
        return {}


# ---------------------------------------------------------------------------
# Provisioning
# ---------------------------------------------------------------------------


class ProvisionError(TeamChannelError):
    """Channel set creation did not complete."""


class AlreadyOwnedError(ProvisionError):
    """The requester already owns a team channel set."""

    code = "ALREADY_OWNED"

    def __init__(self, record: OwnershipRecord) -> None:
        super().__init__(f"user {record.owner} already owns category {record.category_id}")
        self.record = record

    def format_kwargs(self) -> dict[str, object]:
        return {
            "display_name": self.record.display_name,
            "channel_mention": self.record.text_channel_mention,
        }


class GameNameError(ProvisionError):
    """The supplied game name cannot be used."""


class EmptyGameNameError(GameNameError):
    code = "NO_NAME"


class ForbiddenCharacterError(GameNameError):
    code = "INVALID_NAME"

    def __init__(self, character: str) -> None:
        super().__init__(f"game name contains forbidden character {character!r}")
        self.character = character

    def format_kwargs(self) -> dict[str, object]:
        return {"character": self.character}


class ChannelCreationError(ProvisionError):
    """Discord rejected a channel creation request.

    The discord.py exception is kept as ``cause`` (and ``__cause__``) for
    logging only.
    """

    code = "CREATION_FAILED"

    def __init__(
        self,
        kind: ChannelKind,
        cause: BaseException,
        *,
        category_id: int | None = None,
    ) -> None:
        super().__init__(f"{kind.value} channel creation failed: {cause}")
        self.kind = kind
        self.cause = cause
        self.category_id = category_id

    def format_kwargs(self) -> dict[str, object]:
        return {"kind": self.kind.label}


class CategoryCreationFailed(ChannelCreationError):
    pass


class TextCreationFailed(ChannelCreationError):
    pass


class VoiceCreationFailed(ChannelCreationError):
    pass


class ChannelTypeMismatchError(ProvisionError):
    """Discord accepted the request but returned a different kind of channel."""

    code = "TYPE_MISMATCH"

    def __init__(
        self,
        expected: ChannelKind,
        actual: str,
        *,
        channel_id: int | None = None,
        category_id: int | None = None,
    ) -> None:
        super().__init__(
            f"asked for a {expected.value} channel but received {actual} (id={channel_id})"
        )
        self.expected = expected
        self.actual = actual
        self.channel_id = channel_id
        self.category_id = category_id

    def format_kwargs(self) -> dict[str, object]:
        return {"kind": self.expected.label}


class CategoryTypeMismatch(ChannelTypeMismatchError):
    pass


class TextTypeMismatch(ChannelTypeMismatchError):
    pass


class VoiceTypeMismatch(ChannelTypeMismatchError):
    pass


class OwnershipCommitError(ProvisionError):
    """All channels were created but the ownership record could not be saved."""

    code = "COMMIT_FAILED"

    def __init__(self, category_id: int, cause: BaseException) -> None:
        super().__init__(f"could not record ownership of category {category_id}: {cause}")
        self.category_id = category_id
        self.cause = cause


# ---------------------------------------------------------------------------
# Teardown
# ---------------------------------------------------------------------------


class TeardownError(TeamChannelError):
    """Channel set removal did not complete."""


class InvalidUserIdError(TeardownError):
    code = "INVALID_USER_ID"


class MissingUserIdError(InvalidUserIdError):
    code = "MISSING_USER_ID"


class TeamNotFoundError(TeardownError):
    code = "NO_TEAM_CHANNELS"

    def __init__(self, user_id: int) -> None:
        super().__init__(f"user {user_id} has no team channels")
        self.user_id = user_id


class ChannelDeletionError(TeardownError):
    code = "DELETION_FAILED"

    def __init__(self, record: OwnershipRecord, cause: BaseException) -> None:
        super().__init__(f"deleting category {record.category_id} failed: {cause}")
        self.record = record
        self.cause = cause


class RecordRemovalError(TeardownError):
    """The category is gone but the ownership record could not be dropped."""

    code = "REMOVAL_COMMIT_FAILED"

    def __init__(self, record: OwnershipRecord, cause: BaseException) -> None:
        super().__init__(f"could not drop ownership record for {record.owner}: {cause}")
        self.record = record
        self.cause = cause
