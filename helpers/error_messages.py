"""
Centralized message formatting for user-facing replies.

Errors raised by the services carry a ``code``; this module is the only place
that turns a code into text. Remote failures all map to short "failed, details
logged" replies so Discord API internals never reach the chat.
"""

from collections import defaultdict

from config.config_loader import ConfigLoader
from utils.errors import TeamChannelError
from utils.logging import get_logger

logger = get_logger(__name__)

ERROR_MESSAGES = {
    # Authorization
    "PROVISION_DENIED": (
        "Oo, you found a secret command. 😉\n"
        "You will be able to use this command once you have been assigned the "
        "**{role}** role.\n"
        "You will be able to get this role once the jam has started. The details "
        "on how to do so will be made available at that point."
    ),
    "TEARDOWN_DENIED": "WAT",
    # Validation
    "NO_NAME": "You need to specify a game name.",
    "INVALID_NAME": "Game names cannot contain the character {character}",
    "MISSING_USER_ID": "You forgot to provide a user id.",
    "INVALID_USER_ID": "That user id is invalid.",
    # Conflict
    "ALREADY_OWNED": (
        "You have already created channels for your game {display_name} here: "
        "{channel_mention}"
    ),
    "NO_TEAM_CHANNELS": "That user does not have any team channels.",
    # Remote failures and contract violations
    "CREATION_FAILED": "{kind} creation failed. The details were logged.",
    "TYPE_MISMATCH": "{kind} creation failed. The details were logged.",
    "DELETION_FAILED": "Removing the channels failed. The details were logged.",
    "COMMIT_FAILED": (
        "Your channels were created but I couldn't save them. "
        "Please ask an organizer for help."
    ),
    "REMOVAL_COMMIT_FAILED": (
        "The channels were removed but I couldn't update my records. "
        "The details were logged."
    ),
    # Themes and roles
    "THEME_NOT_SINGLE_WORD": "Themes ideas should only be a single word",
    "THEME_SAVE_FAILED": "I couldn't save your theme idea. Please try again later.",
    "ROLE_UNKNOWN": "You need to specify a valid role.\nAvailable roles are:```{roles}```",
    "ROLE_FAILED": "Something went wrong.",
    "UNRECOGNISED_COMMAND": "Unrecognised command",
    "UNKNOWN": "Something went wrong. The details were logged.",
}

SUCCESS_MESSAGES = {
    "CREATED": "Channels created for your game {display_name} here: {channel_mention}",
    "REMOVED": "Removed the channels for team {display_name}.",
    "THEME_DONE": "Theme idea registered, thanks!",
    "THEME_REPLACED": "You can only send one idea. We replaced your old submission",
    "ROLE_ASSIGNED": "New role assigned.",
    "ROLE_REMOVED": "Role removed.",
    "HELP": (
        "Talk to me in a PM to submit theme ideas.\n\n"
        "Jammers can ask for a team category with text and voice channels by "
        "sending `{prefix}create_channels <game name>`\n\n"
        "Get a new role with `{prefix}role <role name>`\n"
        "and leave a role with `{prefix}leave <role name>`"
    ),
}


def format_user_error(code: str, **kwargs) -> str:
    """
    Format a user-facing error message for ``code``.

    Unknown codes fall back to UNKNOWN. A placeholder missing from ``kwargs``
    is rendered as ``???`` rather than raising.

    Examples:
        >>> format_user_error("NO_NAME")
        'You need to specify a game name.'

        >>> format_user_error("CREATION_FAILED", kind="Category")
        'Category creation failed. The details were logged.'
    """
    if code not in ERROR_MESSAGES:
        logger.warning(f"Unknown error code used in format_user_error: {code}")

    message = ERROR_MESSAGES.get(code, ERROR_MESSAGES["UNKNOWN"])
    return _safe_format(message, kwargs)


def format_user_success(code: str, **kwargs) -> str:
    """Format a confirmation message for ``code``."""
    message = SUCCESS_MESSAGES.get(code, "Done.")
    return _safe_format(message, kwargs)


def format_team_error(error: TeamChannelError) -> str:
    """Render a provisioning or teardown error raised by TeamChannelService."""
    return format_user_error(error.code, **error.format_kwargs())


def format_provision_denied() -> str:
    jammer, _ = ConfigLoader.get_role_names()
    return format_user_error("PROVISION_DENIED", role=jammer)


def _safe_format(message: str, kwargs: dict) -> str:
    # Missing placeholders render as ??? and supplied ones still fill in
    return message.format_map(defaultdict(lambda: "???", kwargs))
