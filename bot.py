import os

import discord
from discord.ext import commands
from dotenv import load_dotenv

from config.config_loader import ConfigLoader, normalize_prefix
from services.service_container import ServiceContainer
from utils.log_context import get_context_extra
from utils.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

# Load environment variables
load_dotenv()

# Load configuration using ConfigLoader
ConfigLoader.load_config()

# Normalize the prefix; an empty result means mention-only
# normalize_prefix logs each warning itself
_normalized_prefixes, _ = normalize_prefix(ConfigLoader.get("bot.prefix"))

if _normalized_prefixes:
    PREFIX = _normalized_prefixes
else:
    PREFIX = commands.when_mentioned
    logger.info("Bot will respond to mentions only (no text prefix configured)")


# Configure intents - start from none and enable only what's required
intents = discord.Intents.none()
intents.guilds = True  # Required: categories, channels, roles
intents.members = True  # Required: member roles for the access checks
intents.guild_messages = True  # Required: prefix commands
intents.dm_messages = True  # Required: theme ideas by DM
intents.message_content = True  # Required: reading command arguments and ideas

# List of initial extensions to load
initial_extensions = [
    "cogs.teams.commands",
    "cogs.themes.events",
    "cogs.roles.commands",
    "cogs.general.commands",
]


class MyBot(commands.Bot):
    """Bot with project-specific attributes and helpers."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)

        self.services: ServiceContainer | None = None

    async def setup_hook(self) -> None:
        """Initialize services, then load cogs that depend on them."""
        self.services = ServiceContainer(self)
        await self.services.initialize()
        logger.info("ServiceContainer initialized")

        for ext in initial_extensions:
            try:
                await self.load_extension(ext)
                logger.info(f"Loaded extension: {ext}")
            except commands.ExtensionError as e:
                logger.exception(f"Failed to load extension {ext}", exc_info=e)
                raise

        logger.info("Registered commands: ")
        for command in sorted(self.commands, key=lambda c: c.name):
            logger.info(f"- Command: {command.name}, Description: {command.help}")

    async def on_ready(self) -> None:
        """Called when the bot is ready."""
        if not self.user:
            logger.warning("Bot user is not initialized")
            return
        logger.info(f"Logged in as {self.user} (ID: {self.user.id})")
        logger.info("Bot is ready and online!")

        for guild in self.guilds:
            await self.check_bot_permissions(guild)

    async def on_message(self, message: discord.Message) -> None:
        # Direct messages are theme ideas, handled by the themes cog
        if message.author.bot or message.guild is None:
            return
        await self.process_commands(message)

    async def on_command_error(
        self, ctx: commands.Context, error: commands.CommandError
    ) -> None:
        if isinstance(error, commands.CommandNotFound):
            return
        original = getattr(error, "original", error)
        logger.error(
            "Command %s failed: %s",
            ctx.command.qualified_name if ctx.command else "?",
            error,
            exc_info=original,
            extra=get_context_extra(ctx),
        )

    async def check_bot_permissions(self, guild: discord.Guild) -> None:
        """Verify required guild-level permissions and log any missing ones."""
        required_permissions = [
            "manage_roles",
            "manage_channels",
            "view_channel",
            "send_messages",
            "read_message_history",
        ]

        if not guild or not guild.me:
            logger.warning(
                "Bot permissions cannot be checked because the bot is not in the guild or the guild is None."
            )
            return

        bot_member = guild.me
        if missing_permissions := [
            perm
            for perm in required_permissions
            if not getattr(bot_member.guild_permissions, perm, False)
        ]:
            logger.warning(
                f"Missing permissions in guild '{guild.name}': {', '.join(missing_permissions)}"
            )
        else:
            logger.info(
                f"All required permissions are present in guild '{guild.name}'."
            )

    async def close(self) -> None:
        """
        Closes the bot and cleans up all resources.
        """
        logger.info("Shutting down the bot.")

        if self.services:
            try:
                await self.services.cleanup()
                logger.info("Services cleaned up")
            except Exception as e:
                logger.exception("Error cleaning up services", exc_info=e)

        await super().close()


def main() -> None:
    # Load sensitive information from .env
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.critical("DISCORD_TOKEN not found in environment variables.")
        raise ValueError("DISCORD_TOKEN not set.")

    bot = MyBot(command_prefix=PREFIX, intents=intents, help_command=None)
    bot.run(token, log_handler=None)


# Only auto-run if not in explicit dry-run context (TESTBOT_DRY_RUN)
if __name__ == "__main__" and os.getenv("TESTBOT_DRY_RUN") != "1":
    main()
