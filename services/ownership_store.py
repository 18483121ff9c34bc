"""
Ownership Store

Maps each user to the one team channel set they own. The JSON file on disk is
the durable copy; the in-memory mapping only changes after the file write for
that change has succeeded.
"""

from __future__ import annotations

import asyncio
import weakref
from pathlib import Path
from typing import Any, ClassVar

from helpers.json_store import JsonFileStore
from utils.errors import AlreadyOwnedError
from utils.types import OwnershipRecord, UserId

from .base import BaseService


class OwnershipFile(JsonFileStore):
    schema: ClassVar[dict[str, Any]] = {
        "type": "object",
        "propertyNames": {"pattern": "^[0-9]+$"},
        "additionalProperties": {
            "type": "object",
            "required": ["display_name", "category_id"],
            "properties": {
                "display_name": {"type": "string"},
                "category_id": {"type": "integer", "minimum": 0},
                "text_channel_id": {"type": ["integer", "null"], "minimum": 0},
            },
        },
    }


class OwnershipStore(BaseService):
    """
    Process-wide owner -> OwnershipRecord mapping.

    Two locks are involved:
        - ``owner_lock(owner)`` serializes whole workflows for one user, so two
          ``create_channels`` from the same user cannot both pass the
          "not already owned" check. Other users are unaffected.
        - ``_write_lock`` is held only while a single mutation is persisted and
          committed, never across Discord API calls.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__("ownership_store")
        self._file = OwnershipFile(path)
        self._records: dict[UserId, OwnershipRecord] = {}
        self._write_lock = asyncio.Lock()
        # An entry lives only while a workflow holds or waits on the lock
        self._owner_locks: weakref.WeakValueDictionary[UserId, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def path(self) -> Path:
        return self._file.path

    async def _initialize_impl(self) -> None:
        raw = self._file.read()
        self._records = {
            int(owner): OwnershipRecord.from_json(int(owner), value)
            for owner, value in raw.items()
        }
        self.logger.info(
            "Loaded %d team channel owner(s) from %s", len(self._records), self.path
        )

    def owner_lock(self, owner: UserId) -> asyncio.Lock:
        """Return the lock guarding check-then-commit sequences for ``owner``.

        Callers must keep the returned lock referenced for as long as they use it.
        """
        lock = self._owner_locks.get(owner)
        if lock is None:
            lock = asyncio.Lock()
            self._owner_locks[owner] = lock
        return lock

    def get(self, owner: UserId) -> OwnershipRecord | None:
        self._ensure_initialized()
        return self._records.get(owner)

    def records(self) -> list[OwnershipRecord]:
        self._ensure_initialized()
        return list(self._records.values())

    def __contains__(self, owner: object) -> bool:
        return owner in self._records

    def __len__(self) -> int:
        return len(self._records)

    async def insert(self, record: OwnershipRecord) -> None:
        """Add ``record`` unless its owner already has one.

        Raises:
            AlreadyOwnedError: The owner already has a record; nothing is written.
            StoreError: The file could not be written; nothing is committed.
        """
        self._ensure_initialized()
        async with self._write_lock:
            existing = self._records.get(record.owner)
            if existing is not None:
                raise AlreadyOwnedError(existing)

            updated = dict(self._records)
            updated[record.owner] = record
            self._file.write(self._serialize(updated))
            self._records = updated

        self.logger.info(
            "Recorded team channels for %s",
            record.owner,
            extra={
                "user_id": str(record.owner),
                "category_id": str(record.category_id),
                "display_name": record.display_name,
            },
        )

    async def remove(self, owner: UserId) -> OwnershipRecord | None:
        """Drop the owner's record, returning it, or None if there was none.

        Raises:
            StoreError: The file could not be written; the record is kept.
        """
        self._ensure_initialized()
        async with self._write_lock:
            record = self._records.get(owner)
            if record is None:
                return None

            updated = {k: v for k, v in self._records.items() if k != owner}
            self._file.write(self._serialize(updated))
            self._records = updated

        self.logger.info(
            "Removed team channel record for %s",
            owner,
            extra={"user_id": str(owner), "category_id": str(record.category_id)},
        )
        return record

    @staticmethod
    def _serialize(records: dict[UserId, OwnershipRecord]) -> dict[str, Any]:
        return {str(owner): record.to_json() for owner, record in records.items()}

    async def health_check(self) -> dict[str, Any]:
        status = await super().health_check()
        status["owners"] = len(self._records)
        status["path"] = str(self.path)
        return status
