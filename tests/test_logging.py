"""
Structured logging tests.
"""

import json
import logging
import sys

from tests.factories import FakeGuild, make_context, make_member
from utils.log_context import get_context_extra
from utils.logging import CustomJsonFormatter, _error_log_namer
from utils.types import OwnershipRecord


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("teams", logging.ERROR, __file__, 10, "failed %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context_fields():
    line = CustomJsonFormatter().format(
        _record(user_id="1", category_id="2", display_name="Pixel Quest", unrelated="no")
    )
    data = json.loads(line)

    assert data["message"] == "failed x"
    assert data["level"] == "ERROR"
    assert data["user_id"] == "1"
    assert data["category_id"] == "2"
    assert data["display_name"] == "Pixel Quest"
    assert "unrelated" not in data


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()

    data = json.loads(CustomJsonFormatter().format(record))
    assert "ValueError: boom" in data["exception"]


def test_context_extra_from_command_context():
    guild = FakeGuild(guild_id=5)
    ctx = make_context(make_member(7, guild=guild), guild, "remove_channels")

    extra = get_context_extra(ctx, category_id="9")

    assert extra["guild_id"] == "5"
    assert extra["user_id"] == "7"
    assert extra["command_name"] == "remove_channels"
    assert extra["category_id"] == "9"
    assert "channel_id" in extra


def test_context_extra_with_record():
    guild = FakeGuild(guild_id=5)
    ctx = make_context(make_member(7, guild=guild), guild, "remove_channels")
    record = OwnershipRecord(owner=7, display_name="Pixel Quest", category_id=42)

    extra = get_context_extra(ctx, record=record)

    assert extra["category_id"] == "42"
    assert extra["display_name"] == "Pixel Quest"


def test_error_log_rotation_name():
    assert _error_log_namer("logs/errors/errors.jsonl.2026-01-02").endswith(
        "errors_2026-01-02.jsonl"
    )
