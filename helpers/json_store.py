"""
JSON file persistence shared by the bot's small key/value stores.

A store file is read once at startup. A missing file is an empty store. A file
that is not valid JSON, or does not match the store's JSON schema, is moved
aside to ``<name>.corrupt`` and the store starts empty; the bot keeps running.
A file that cannot be read, or cannot be moved aside, stays where it is and the
store refuses writes so it is never replaced by a partial mapping.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, ClassVar

from jsonschema import Draft7Validator

from helpers.atomic_write import AtomicWriteError, atomic_write_json
from utils.errors import StoreError
from utils.logging import get_logger

logger = get_logger(__name__)


class JsonFileStore:
    """Load-or-default and write-then-acknowledge access to one JSON file."""

    schema: ClassVar[dict[str, Any]] = {"type": "object"}

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._validator = Draft7Validator(self.schema)
        # Set while an unread file is still at self.path; writing would replace it
        self.write_blocked: str | None = None

    def read(self) -> dict[str, Any]:
        """Return the file's mapping, or ``{}`` if it is absent or unusable.

        If the file could not be read, or could not be moved aside after failing
        validation, writes are refused until a later ``read`` succeeds.
        """
        self.write_blocked = None
        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            logger.info("Store file %s not found; starting empty", self.path)
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.exception("Store file %s is not valid JSON: %s", self.path, e)
            self._quarantine()
            return {}
        except OSError as e:
            logger.exception("Could not read store file %s: %s", self.path, e)
            self.write_blocked = f"{self.path} could not be read"
            return {}

        errors = [
            f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}"
            for err in self._validator.iter_errors(data)
        ]
        if errors:
            logger.error(
                "Store file %s failed schema validation: %s", self.path, "; ".join(errors[:5])
            )
            self._quarantine()
            return {}

        return data

    def write(self, data: dict[str, Any]) -> None:
        """Persist ``data``; the caller commits in memory only after this returns."""
        if self.write_blocked:
            raise StoreError(f"refusing to overwrite {self.path}: {self.write_blocked}")
        try:
            atomic_write_json(self.path, data)
        except AtomicWriteError as e:
            raise StoreError(f"could not persist {self.path}") from e

    def _quarantine(self) -> None:
        target = self.path.with_name(self.path.name + ".corrupt")
        try:
            self.path.replace(target)
            logger.warning("Moved unusable store file %s to %s", self.path, target)
        except OSError as e:
            logger.exception("Could not move unusable store file %s aside: %s", self.path, e)
            self.write_blocked = f"{self.path} could not be moved aside"
