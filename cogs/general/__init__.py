"""
General Package

Help and unknown-command replies.
"""

from .commands import GeneralCommands

__all__ = ["GeneralCommands"]
