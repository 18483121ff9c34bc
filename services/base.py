"""
Lifecycle shared by the bot's stores and workflow services.

A service moves UNINITIALIZED -> INITIALIZING -> READY, or to ERROR if its
startup raised. Public methods call ``_ensure_initialized`` so a command that
arrives before startup finished fails loudly instead of reading an empty store.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from utils.logging import get_logger
from utils.types import ServiceStatus


class BaseService(ABC):
    def __init__(self, name: str) -> None:
        self.name = name
        self.logger = get_logger(f"services.{name}")
        self.status = ServiceStatus.UNINITIALIZED
        self._startup_lock = asyncio.Lock()

    @property
    def _initialized(self) -> bool:
        return self.status is ServiceStatus.READY

    async def initialize(self) -> None:
        """Run ``_initialize_impl`` once; concurrent callers wait for the first."""
        async with self._startup_lock:
            if self.status is ServiceStatus.READY:
                return

            self.status = ServiceStatus.INITIALIZING
            self.logger.info("Starting %s", self.name)
            try:
                await self._initialize_impl()
            except Exception as e:
                self.status = ServiceStatus.ERROR
                self.logger.exception("%s failed to start", self.name, exc_info=e)
                raise
            self.status = ServiceStatus.READY
            self.logger.info("%s ready", self.name)

    async def shutdown(self) -> None:
        """Stop the service. Errors are logged; the service always ends UNINITIALIZED."""
        if self.status is not ServiceStatus.READY:
            return

        self.logger.info("Stopping %s", self.name)
        try:
            await self._shutdown_impl()
        except Exception as e:
            self.logger.exception("%s failed to stop cleanly", self.name, exc_info=e)
        finally:
            self.status = ServiceStatus.UNINITIALIZED

    @abstractmethod
    async def _initialize_impl(self) -> None:
        """Load state; raising marks the service ERROR."""

    async def _shutdown_impl(self) -> None:
        return None

    def _ensure_initialized(self) -> None:
        if self.status is not ServiceStatus.READY:
            raise RuntimeError(f"{self.name} is {self.status.value}, not ready")

    async def health_check(self) -> dict[str, Any]:
        return {
            "service": self.name,
            "initialized": self._initialized,
            "status": self.status.value,
        }
