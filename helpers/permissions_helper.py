"""Access gate for the team channel commands.

Both checks are pure predicates over the member's roles; they never touch the
ownership store, so a refusal cannot leak who owns what.
"""

from __future__ import annotations

import discord

from config.config_loader import ConfigLoader
from helpers.role_helper import has_role


def can_provision(member: discord.Member | discord.User) -> bool:
    """Jammers and organizers may create team channels."""
    jammer, organizer = ConfigLoader.get_role_names()
    if not isinstance(member, discord.Member):
        return False
    return has_role(member, jammer) or has_role(member, organizer)


def can_tear_down(member: discord.Member | discord.User) -> bool:
    """Only organizers may remove someone's team channels."""
    _, organizer = ConfigLoader.get_role_names()
    if not isinstance(member, discord.Member):
        return False
    return has_role(member, organizer)
