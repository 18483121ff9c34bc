"""
Crash-safe replacement of the ownership and theme files.

Content goes to a hidden sibling temp file, is fsynced, then renamed over the
target. Readers see the previous file or the new one, never a partial write.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class AtomicWriteError(Exception):
    """The file on disk was left unchanged."""


def _write_sibling(target: Path, content: str, encoding: str, mode: int) -> Path:
    # Same directory as the target so the rename stays on one filesystem
    fd, name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    temp = Path(name)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        temp.chmod(mode)
    except BaseException:
        temp.unlink(missing_ok=True)
        raise
    return temp


def atomic_write_text(
    filepath: Path | str,
    content: str,
    *,
    encoding: str = "utf-8",
    mode: int = 0o644,
) -> None:
    """
    Replace ``filepath`` with ``content``, creating parent directories.

    Raises:
        AtomicWriteError: wrapping the OSError from mkdir, write, fsync or rename.
    """
    target = Path(filepath)
    temp: Path | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        temp = _write_sibling(target, content, encoding, mode)
        temp.replace(target)
    except OSError as e:
        if temp is not None:
            temp.unlink(missing_ok=True)
        logger.exception("Could not replace %s", target)
        raise AtomicWriteError(f"could not write {target}: {e}") from e

    logger.debug("Replaced %s (%d chars)", target, len(content))


def atomic_write_json(filepath: Path | str, data: dict[str, Any], *, indent: int = 2) -> None:
    """Write ``data`` as sorted, indented JSON. Unserializable data raises AtomicWriteError."""
    try:
        content = json.dumps(data, indent=indent, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError) as e:
        raise AtomicWriteError(f"{filepath} payload is not JSON serializable: {e}") from e

    atomic_write_text(filepath, content + "\n")
