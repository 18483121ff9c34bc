"""
Test user-facing messages for the team channel, theme and role commands.
"""

import pytest

from helpers.error_messages import (
    ERROR_MESSAGES,
    format_provision_denied,
    format_team_error,
    format_user_error,
    format_user_success,
)
from utils.errors import (
    AlreadyOwnedError,
    CategoryCreationFailed,
    ChannelDeletionError,
    EmptyGameNameError,
    ForbiddenCharacterError,
    InvalidUserIdError,
    MissingUserIdError,
    TeamNotFoundError,
    TextTypeMismatch,
    VoiceCreationFailed,
)
from utils.types import ChannelKind, OwnershipRecord

RECORD = OwnershipRecord(owner=1, display_name="Pixel Quest", category_id=2, text_channel_id=3)


class TestTeamErrors:
    def test_no_name(self):
        assert format_team_error(EmptyGameNameError()) == "You need to specify a game name."

    def test_invalid_name(self):
        result = format_team_error(ForbiddenCharacterError("`"))
        assert result == "Game names cannot contain the character `"

    def test_already_owned_links_channel(self):
        result = format_team_error(AlreadyOwnedError(RECORD))
        assert "Pixel Quest" in result
        assert "<#3>" in result

    def test_already_owned_without_text_channel(self):
        record = OwnershipRecord(owner=1, display_name="Old", category_id=2)
        result = format_team_error(AlreadyOwnedError(record))
        assert "Team: Old" in result

    def test_creation_failures_name_the_step(self):
        assert format_team_error(
            CategoryCreationFailed(ChannelKind.CATEGORY, OSError())
        ).startswith("Category creation failed")
        assert format_team_error(
            VoiceCreationFailed(ChannelKind.VOICE, OSError(), category_id=5)
        ).startswith("Voice channel creation failed")

    def test_type_mismatch_looks_like_creation_failure(self):
        result = format_team_error(TextTypeMismatch(ChannelKind.TEXT, "VoiceChannel", channel_id=9))
        assert result == "Text channel creation failed. The details were logged."

    def test_remote_details_not_leaked(self):
        result = format_team_error(
            ChannelDeletionError(RECORD, OSError("secret internals"))
        )
        assert "secret" not in result

    def test_user_id_errors(self):
        assert format_team_error(MissingUserIdError()) == "You forgot to provide a user id."
        assert format_team_error(InvalidUserIdError()) == "That user id is invalid."
        assert "does not have" in format_team_error(TeamNotFoundError(5))


class TestFormatting:
    def test_unknown_code_falls_back(self):
        assert format_user_error("NOPE") == ERROR_MESSAGES["UNKNOWN"]

    def test_missing_placeholder(self):
        assert format_user_error("INVALID_NAME") == "Game names cannot contain the character ???"

    def test_missing_placeholder_keeps_supplied_ones(self):
        text = format_user_success("CREATED", display_name="Pixel Quest")
        assert text == "Channels created for your game Pixel Quest here: ???"

    @pytest.mark.usefixtures("test_config")
    def test_provision_denied_names_role(self):
        assert "**Jammer**" in format_provision_denied()

    def test_success_messages(self):
        assert (
            format_user_success("CREATED", display_name="Pixel Quest", channel_mention="<#3>")
            == "Channels created for your game Pixel Quest here: <#3>"
        )
        assert format_user_success("REMOVED", display_name="Pixel Quest") == (
            "Removed the channels for team Pixel Quest."
        )

    def test_role_list_rendered_in_code_block(self):
        result = format_user_error("ROLE_UNKNOWN", roles="Programmer\nMusician")
        assert "```Programmer\nMusician```" in result
