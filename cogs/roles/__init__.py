"""
Roles Package

Self-service ``~role`` / ``~leave`` commands for the configured jam roles.
"""

from .commands import RoleCommands

__all__ = ["RoleCommands"]
