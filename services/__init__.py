"""
Services package for the Discord bot.

This package contains service classes that handle business logic and data access
patterns for the bot's functionality. Services are organized by domain and provide
clean interfaces for bot operations.
"""

from .base import BaseService
from .ownership_store import OwnershipStore
from .service_container import ServiceContainer
from .team_channel_service import TeamChannelService
from .theme_service import ThemeService

__all__ = [
    "BaseService",
    "OwnershipStore",
    "ServiceContainer",
    "TeamChannelService",
    "ThemeService",
]
