"""
End-to-end command tests: gate, service and reply rendering together.
"""

from unittest.mock import patch

import pytest

from cogs.teams.commands import TeamCommands
from tests.factories import http_exception, make_context, make_member

ALICE = 111111111111111111


@pytest.fixture
def cog(bot, test_config):
    return TeamCommands(bot)


def _sent(ctx) -> str:
    ctx.send.assert_awaited_once()
    return ctx.send.await_args.args[0]


async def _create(cog, ctx, game_name):
    await TeamCommands.create_channels.callback(cog, ctx, game_name=game_name)


async def _remove(cog, ctx, user_id):
    await TeamCommands.remove_channels.callback(cog, ctx, user_id=user_id)


class TestCreateChannels:
    @pytest.mark.asyncio
    async def test_success_reply(self, cog, guild):
        ctx = make_context(make_member(ALICE, ["Jammer"], guild), guild)

        await _create(cog, ctx, "Pixel Quest")

        record = cog.team_service.store.get(ALICE)
        assert _sent(ctx) == (
            f"<@{ALICE}> Channels created for your game Pixel Quest here: "
            f"<#{record.text_channel_id}>"
        )

    @pytest.mark.asyncio
    async def test_second_attempt_points_at_existing(self, cog, guild):
        author = make_member(ALICE, ["Jammer"], guild)
        await _create(cog, make_context(author, guild), "Pixel Quest")

        ctx = make_context(author, guild)
        await _create(cog, ctx, "Another Game")

        record = cog.team_service.store.get(ALICE)
        reply = _sent(ctx)
        assert "already created channels for your game Pixel Quest" in reply
        assert f"<#{record.text_channel_id}>" in reply
        assert guild.create_category.await_count == 1

    @pytest.mark.asyncio
    async def test_backtick_name(self, cog, guild):
        ctx = make_context(make_member(ALICE, ["Jammer"], guild), guild)

        await _create(cog, ctx, "bad`name")

        assert _sent(ctx).endswith("Game names cannot contain the character `")
        assert guild.remote_calls == 0

    @pytest.mark.asyncio
    async def test_empty_name(self, cog, guild):
        ctx = make_context(make_member(ALICE, ["Organizer"], guild), guild)

        await _create(cog, ctx, "   ")

        assert _sent(ctx).endswith("You need to specify a game name.")

    @pytest.mark.asyncio
    async def test_without_role(self, cog, guild):
        ctx = make_context(make_member(ALICE, [], guild), guild)

        await _create(cog, ctx, "Pixel Quest")

        assert "**Jammer**" in _sent(ctx)
        assert guild.remote_calls == 0

    @pytest.mark.asyncio
    async def test_creation_failure_logged_not_leaked(self, cog, guild, caplog):
        guild.create_text_channel.side_effect = http_exception(500, "boom internals")
        ctx = make_context(make_member(ALICE, ["Jammer"], guild), guild)

        await _create(cog, ctx, "Pixel Quest")

        reply = _sent(ctx)
        assert reply.endswith("Text channel creation failed. The details were logged.")
        assert "boom" not in reply
        assert any("manual cleanup" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_unexpected_error(self, cog, guild):
        ctx = make_context(make_member(ALICE, ["Jammer"], guild), guild)

        with patch.object(cog.team_service, "provision", side_effect=ValueError("bug")):
            await _create(cog, ctx, "Pixel Quest")

        assert _sent(ctx).endswith("Something went wrong. The details were logged.")

    @pytest.mark.asyncio
    async def test_mentions_restricted_to_users(self, cog, guild):
        ctx = make_context(make_member(ALICE, ["Jammer"], guild), guild)

        await _create(cog, ctx, "@everyone")

        mentions = ctx.send.await_args.kwargs["allowed_mentions"]
        assert mentions.everyone is False
        assert mentions.roles is False


class TestRemoveChannels:
    @pytest.mark.asyncio
    async def test_organizer_removes(self, cog, guild):
        await _create(cog, make_context(make_member(ALICE, ["Jammer"], guild), guild), "Pixel Quest")
        ctx = make_context(make_member(roles=["Organizer"], guild=guild), guild, "remove_channels")

        await _remove(cog, ctx, str(ALICE))

        assert _sent(ctx).endswith("Removed the channels for team Pixel Quest.")
        assert cog.team_service.store.get(ALICE) is None

    @pytest.mark.asyncio
    async def test_jammer_refused(self, cog, guild):
        ctx = make_context(make_member(roles=["Jammer"], guild=guild), guild, "remove_channels")

        await _remove(cog, ctx, str(ALICE))

        assert _sent(ctx).endswith("WAT")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("user_id", "expected"),
        [
            ("", "You forgot to provide a user id."),
            ("abc", "That user id is invalid."),
            ("1 2", "That user id is invalid."),
            ("12345", "That user does not have any team channels."),
        ],
    )
    async def test_bad_targets(self, cog, guild, user_id, expected):
        ctx = make_context(make_member(roles=["Organizer"], guild=guild), guild, "remove_channels")

        await _remove(cog, ctx, user_id)

        assert _sent(ctx).endswith(expected)

    @pytest.mark.asyncio
    async def test_failed_deletion_then_retry(self, cog, guild):
        await _create(cog, make_context(make_member(ALICE, ["Jammer"], guild), guild), "Pixel Quest")
        record = cog.team_service.store.get(ALICE)
        guild.get_channel(record.category_id).delete.side_effect = [http_exception(), None]
        organizer = make_member(roles=["Organizer"], guild=guild)

        ctx = make_context(organizer, guild, "remove_channels")
        await _remove(cog, ctx, str(ALICE))
        assert _sent(ctx).endswith("Removing the channels failed. The details were logged.")
        assert cog.team_service.store.get(ALICE) == record

        ctx = make_context(organizer, guild, "remove_channels")
        await _remove(cog, ctx, str(ALICE))
        assert _sent(ctx).endswith("Removed the channels for team Pixel Quest.")
        assert cog.team_service.store.get(ALICE) is None
