"""
Game name validation and markdown escaping.

Names are echoed back to Discord, so characters that Discord markdown treats
specially are backslash-escaped. Backticks cannot be escaped inside the code
spans the bot uses, so a name containing one is rejected outright.
"""

import re
from collections.abc import Sequence

from utils.errors import EmptyGameNameError, ForbiddenCharacterError

FORBIDDEN_CHARACTERS = frozenset("`")

# - _ + * " # = . and both middle dots (U+00B7, U+22C5), backslash, < > { }
MARKDOWN_ESCAPE_REGEX = re.compile(r'[-_+*"#=.·⋅\\<>{}]')


def join_name(tokens: Sequence[str]) -> str:
    """Re-join command words with single spaces."""
    return " ".join(tokens)


def escape_markdown(name: str) -> str:
    """Prefix every markdown-significant character with a backslash.

    Not idempotent: escaping an escaped name escapes the backslashes again.
    """
    return MARKDOWN_ESCAPE_REGEX.sub(lambda m: "\\" + m.group(0), name)


def validate_name(name: str) -> str:
    """Return ``name`` unchanged or raise if it cannot be used."""
    if not name:
        raise EmptyGameNameError("no game name given")
    for ch in name:
        if ch in FORBIDDEN_CHARACTERS:
            raise ForbiddenCharacterError(ch)
    return name


def sanitize(tokens: Sequence[str]) -> str:
    """
    Turn the words of a ``create_channels`` command into a display-safe name.

    Raises:
        EmptyGameNameError: No words were given.
        ForbiddenCharacterError: The joined name contains a backtick.
    """
    return escape_markdown(validate_name(join_name(tokens)))
