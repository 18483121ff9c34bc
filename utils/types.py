"""
Type definitions and common data structures for the Discord bot.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ChannelKind(Enum):
    """Kinds of guild channel the bot creates."""

    CATEGORY = "category"
    TEXT = "text"
    VOICE = "voice"

    @property
    def label(self) -> str:
        return {
            ChannelKind.CATEGORY: "Category",
            ChannelKind.TEXT: "Text channel",
            ChannelKind.VOICE: "Voice channel",
        }[self]


@dataclass(frozen=True)
class OwnershipRecord:
    """Durable proof that a user currently holds one team channel set.

    Only the category id is needed to tear the set down; Discord deletes the
    child channels with it. ``text_channel_id`` is kept so the owner can be
    pointed back at their channel and may be None for older records.
    """

    owner: int
    display_name: str
    category_id: int
    text_channel_id: int | None = None

    @property
    def text_channel_mention(self) -> str:
        if self.text_channel_id is None:
            return f"the **Team: {self.display_name}** category"
        return f"<#{self.text_channel_id}>"

    def to_json(self) -> dict[str, Any]:
        return {
            "display_name": self.display_name,
            "category_id": self.category_id,
            "text_channel_id": self.text_channel_id,
        }

    @classmethod
    def from_json(cls, owner: int, data: dict[str, Any]) -> "OwnershipRecord":
        return cls(
            owner=owner,
            display_name=data["display_name"],
            category_id=int(data["category_id"]),
            text_channel_id=(
                int(data["text_channel_id"])
                if data.get("text_channel_id") is not None
                else None
            ),
        )


@dataclass(frozen=True)
class ProvisionRequest:
    """A single ``create_channels`` invocation."""

    requester: int
    raw_name_tokens: tuple[str, ...]
    guild: Any  # discord.Guild


@dataclass(frozen=True)
class ProvisionedChannelSet:
    """Result of a successful provision; discarded once the reply is sent."""

    display_name: str
    category_id: int
    text_channel_id: int

    @property
    def text_channel_mention(self) -> str:
        return f"<#{self.text_channel_id}>"


class ThemeSubmissionResult(Enum):
    """Outcome of a theme idea submission."""

    DONE = "done"
    REPLACED = "replaced"


class ServiceStatus(Enum):
    """Service initialization status."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    ERROR = "error"


# Type aliases
GuildId = int
UserId = int
ChannelId = int
RoleId = int
