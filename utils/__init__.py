"""
Utilities Package

Common utilities and helper functions for the Discord bot.
"""

from .errors import BotError, ConfigError, StoreError, TeamChannelError
from .logging import get_logger, setup_logging
from .types import (
    ChannelKind,
    OwnershipRecord,
    ProvisionedChannelSet,
    ProvisionRequest,
)

__all__ = [
    "BotError",
    "ChannelKind",
    "ConfigError",
    "OwnershipRecord",
    "ProvisionRequest",
    "ProvisionedChannelSet",
    "StoreError",
    "TeamChannelError",
    "get_logger",
    "setup_logging",
]
