"""
Service Container

Central registry for all bot services providing dependency injection and service lifecycle management.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from config.config_loader import (
    DEFAULT_OWNERSHIP_FILE,
    DEFAULT_THEMES_FILE,
    ConfigLoader,
)
from utils.logging import get_logger

from .ownership_store import OwnershipStore
from .team_channel_service import TeamChannelService
from .theme_service import ThemeService

if TYPE_CHECKING:
    from discord.ext.commands import Bot


class ServiceContainer:
    """
    Central container for managing all bot services.

    The ownership store is created here and handed to the team channel
    service, which owns its lifecycle.
    """

    def __init__(
        self,
        bot: Optional["Bot"] = None,
        *,
        ownership_file: Path | str | None = None,
        themes_file: Path | str | None = None,
    ) -> None:
        self.logger = get_logger("services.container")
        self.bot = bot
        self._ownership_file = ownership_file or ConfigLoader.get_storage_path(
            "ownership_file", DEFAULT_OWNERSHIP_FILE
        )
        self._themes_file = themes_file or ConfigLoader.get_storage_path(
            "themes_file", DEFAULT_THEMES_FILE
        )
        self._ownership_store: OwnershipStore | None = None
        self._team_channels: TeamChannelService | None = None
        self._themes: ThemeService | None = None
        self._initialized = False

    @property
    def ownership_store(self) -> OwnershipStore:
        """Get the ownership store."""
        if self._ownership_store is None:
            raise RuntimeError("OwnershipStore not initialized")
        return self._ownership_store

    @property
    def team_channels(self) -> TeamChannelService:
        """Get the team channel service."""
        if self._team_channels is None:
            raise RuntimeError("TeamChannelService not initialized")
        return self._team_channels

    @property
    def themes(self) -> ThemeService:
        """Get the theme service."""
        if self._themes is None:
            raise RuntimeError("ThemeService not initialized")
        return self._themes

    def get_all_services(self) -> list:
        """Get all initialized services for health monitoring."""
        return [
            s
            for s in (self._ownership_store, self._team_channels, self._themes)
            if s is not None
        ]

    async def initialize(self) -> None:
        """Initialize all services in dependency order."""
        if self._initialized:
            self.logger.warning("ServiceContainer already initialized")
            return

        try:
            self.logger.info("Initializing services")

            self._ownership_store = OwnershipStore(self._ownership_file)
            self._team_channels = TeamChannelService(self._ownership_store)
            await self._team_channels.initialize()
            self.logger.debug("TeamChannelService initialized")

            self._themes = ThemeService(self._themes_file)
            await self._themes.initialize()
            self.logger.debug("ThemeService initialized")

            self._initialized = True
            self.logger.info("All services initialized successfully")

        except Exception as e:
            self.logger.exception("Failed to initialize services", exc_info=e)
            raise

    async def health_snapshot(self) -> dict[str, Any]:
        """Collect ``health_check`` output from every live service."""
        return {s.name: await s.health_check() for s in self.get_all_services()}

    async def cleanup(self) -> None:
        """Clean up all services in reverse dependency order."""
        if not self._initialized:
            return

        self.logger.info("Cleaning up services")

        if self._themes:
            await self._themes.shutdown()
            self._themes = None

        # Shuts down the ownership store as well
        if self._team_channels:
            await self._team_channels.shutdown()
            self._team_channels = None
        self._ownership_store = None

        self._initialized = False
        self.logger.info("Services cleaned up")
