"""
Theme Service

Collects one jam theme idea per user from direct messages. A new idea from
someone who already submitted replaces the old one.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, ClassVar

from helpers.json_store import JsonFileStore
from utils.types import ThemeSubmissionResult, UserId

from .base import BaseService


class ThemeFile(JsonFileStore):
    schema: ClassVar[dict[str, Any]] = {
        "type": "object",
        "propertyNames": {"pattern": "^[0-9]+$"},
        "additionalProperties": {"type": "string"},
    }


def is_single_word(content: str) -> bool:
    return len(content.split()) == 1


class ThemeService(BaseService):
    def __init__(self, path: Path | str) -> None:
        super().__init__("themes")
        self._file = ThemeFile(path)
        self._ideas: dict[UserId, str] = {}
        self._write_lock = asyncio.Lock()

    async def _initialize_impl(self) -> None:
        self._ideas = {int(user): idea for user, idea in self._file.read().items()}
        self.logger.info("Loaded %d theme idea(s) from %s", len(self._ideas), self._file.path)

    def ideas(self) -> dict[UserId, str]:
        self._ensure_initialized()
        return dict(self._ideas)

    async def submit(self, user_id: UserId, idea: str) -> ThemeSubmissionResult:
        """Store ``idea`` for ``user_id``; persisted before it is acknowledged.

        Raises:
            StoreError: The file could not be written; the previous idea stays.
        """
        self._ensure_initialized()
        idea = idea.strip()
        async with self._write_lock:
            replaced = user_id in self._ideas
            updated = dict(self._ideas)
            updated[user_id] = idea
            self._file.write({str(k): v for k, v in updated.items()})
            self._ideas = updated

        self.logger.info(
            "Theme idea %s for %s", "replaced" if replaced else "stored", user_id,
            extra={"user_id": str(user_id)},
        )
        return ThemeSubmissionResult.REPLACED if replaced else ThemeSubmissionResult.DONE
