"""
Themes Package

Collects theme ideas sent to the bot by direct message.
"""

from .events import ThemeEvents

__all__ = ["ThemeEvents"]
