"""
Help and unknown-command replies.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from discord.ext import commands

from cogs.general.commands import GeneralCommands
from tests.factories import FakeBot, FakeGuild, make_context, make_dm, make_member


@pytest.fixture
def cog():
    return GeneralCommands(FakeBot())


@pytest.mark.asyncio
async def test_help_lists_commands(cog):
    guild = FakeGuild()
    ctx = make_context(make_member(guild=guild), guild, "help")

    await GeneralCommands.help.callback(cog, ctx)

    text = ctx.send.await_args.args[0]
    assert "Talk to me in a PM to submit theme ideas." in text
    assert "`~create_channels <game name>`" in text
    assert "`~role <role name>`" in text


@pytest.mark.asyncio
async def test_unknown_command(cog):
    guild = FakeGuild()
    ctx = make_context(make_member(guild=guild), guild, "create_channel")

    await cog.on_command_error(ctx, commands.CommandNotFound('Command "create_channel" is not found'))

    text = ctx.send.await_args.args[0]
    assert "Unrecognised command\nTalk to me in a PM" in text


@pytest.mark.asyncio
async def test_other_command_errors_not_answered(cog):
    guild = FakeGuild()
    ctx = make_context(make_member(guild=guild), guild)

    await cog.on_command_error(ctx, commands.CommandError("boom"))

    ctx.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_mention_gets_help(cog):
    guild = FakeGuild()
    message = make_dm(make_member(guild=guild), "hey <@1> what do you do?")
    message.guild = guild
    message.mentions = [cog.bot.user]
    cog.bot.get_context = AsyncMock(return_value=SimpleNamespace(valid=False, clean_prefix=""))

    await cog.on_message(message)

    assert "Talk to me in a PM" in message.channel.send.await_args.args[0]


@pytest.mark.asyncio
async def test_mention_inside_command_ignored(cog):
    guild = FakeGuild()
    message = make_dm(make_member(guild=guild), "~role <@1>")
    message.guild = guild
    message.mentions = [cog.bot.user]
    cog.bot.get_context = AsyncMock(return_value=SimpleNamespace(valid=True, clean_prefix="~"))

    await cog.on_message(message)

    message.channel.send.assert_not_awaited()
