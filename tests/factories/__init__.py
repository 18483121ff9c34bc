"""
Test Factories Module

Centralized factory functions and fixtures for creating test objects.
Provides DRY utilities for Discord mocks and config fixtures.
"""

from .config_factories import make_config, temp_config_file
from .discord_factories import (
    FakeBot,
    FakeGuild,
    FakeRole,
    http_exception,
    http_response,
    make_channel,
    make_context,
    make_dm,
    make_member,
    make_user,
    next_id,
)

__all__ = [
    "FakeBot",
    "FakeGuild",
    "FakeRole",
    "http_exception",
    "http_response",
    "make_channel",
    "make_config",
    "make_context",
    "make_dm",
    "make_member",
    "make_user",
    "next_id",
    "temp_config_file",
]
