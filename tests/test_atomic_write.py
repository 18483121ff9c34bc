"""
Atomic write helper tests.
"""

import json
from unittest.mock import patch

import pytest

from helpers.atomic_write import AtomicWriteError, atomic_write_json, atomic_write_text


def test_creates_parent_directories(tmp_path):
    target = tmp_path / "a" / "b" / "file.txt"
    atomic_write_text(target, "hello")
    assert target.read_text() == "hello"


def test_replaces_existing_file(tmp_path):
    target = tmp_path / "file.json"
    target.write_text('{"old": true}')

    atomic_write_json(target, {"b": 1, "a": 2})

    assert json.loads(target.read_text()) == {"a": 2, "b": 1}
    assert target.read_text().index('"a"') < target.read_text().index('"b"')


def test_unserializable_data(tmp_path):
    with pytest.raises(AtomicWriteError):
        atomic_write_json(tmp_path / "file.json", {"x": object()})
    assert not (tmp_path / "file.json").exists()


def test_failed_rename_keeps_old_file_and_no_temp(tmp_path):
    target = tmp_path / "file.json"
    target.write_text("old")

    with patch("pathlib.Path.replace", side_effect=OSError("rename failed")):
        with pytest.raises(AtomicWriteError):
            atomic_write_text(target, "new")

    assert target.read_text() == "old"
    assert [p.name for p in tmp_path.iterdir()] == ["file.json"]
