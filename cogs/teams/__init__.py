"""
Teams Package

Prefix commands that create and remove a jam team's channel set.
"""

from .commands import TeamCommands

__all__ = ["TeamCommands"]
