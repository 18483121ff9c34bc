# config/config_loader.py

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

import yaml

DEFAULT_PREFIX = "~"
DEFAULT_JAMMER_ROLE = "Jammer"
DEFAULT_ORGANIZER_ROLE = "Organizer"
DEFAULT_OWNERSHIP_FILE = "data/team_channels.json"
DEFAULT_THEMES_FILE = "data/themes.json"


def _get_project_root() -> Path:
    """Derive project root from this file's location: config/config_loader.py -> project root."""
    return Path(__file__).resolve().parent.parent


class ConfigLoader:
    """
    Singleton class to load and provide access to configuration data.

    Observability:
        - Logs INFO on successful config load with path
        - Logs WARNING on missing config file (degraded mode)
        - Logs ERROR on YAML parse errors
        - Tracks config_status for health reporting
    """

    _config: ClassVar[dict[str, Any]] = {}
    _config_status: ClassVar[str] = "not_loaded"  # "ok", "degraded", "error"
    _config_path: ClassVar[str | None] = None

    @classmethod
    def load_config(cls, config_path: str | None = None) -> dict[str, Any]:
        """Load the configuration from a YAML file if not already loaded.

        Args:
            config_path: Path to the configuration file. If not provided,
                uses CONFIG_PATH env var or defaults to project_root/config/config.yaml.

        Returns:
            Dict[str, Any]: Loaded configuration dictionary.
        """
        if cls._config_status != "not_loaded":
            return cls._config

        if config_path is None:
            config_path = os.environ.get("CONFIG_PATH")
            if config_path:
                logging.info("Config path overridden via CONFIG_PATH env: %s", config_path)

        if config_path is None:
            config_path = str(_get_project_root() / "config" / "config.yaml")

        cls._config_path = config_path

        try:
            with Path(config_path).open(encoding="utf-8") as file:
                loaded = yaml.safe_load(file) or {}

            if not isinstance(loaded, dict):
                logging.warning(
                    "Configuration file didn't contain a mapping; using empty config."
                )
                cls._config = {}
                cls._config_status = "degraded"
            else:
                cls._config = loaded
                cls._config_status = "ok"
                logging.info("Configuration loaded successfully from %s", config_path)

            cls._validate_logging_level()

        except FileNotFoundError:
            logging.warning(
                "Configuration file not found at path: %s; "
                "using empty/default config (degraded mode).",
                config_path,
            )
            cls._config = {}
            cls._config_status = "degraded"
        except yaml.YAMLError as e:
            logging.exception(
                "Error parsing configuration YAML at %s: %s; using empty/default config.",
                config_path,
                e,
            )
            cls._config = {}
            cls._config_status = "error"
        except UnicodeDecodeError as e:
            logging.exception(
                "Encoding error reading configuration at %s: %s; using empty/default config.",
                config_path,
                e,
            )
            cls._config = {}
            cls._config_status = "error"
        return cls._config

    @classmethod
    def get_config_status(cls) -> dict[str, Any]:
        """Return config health status for observability."""
        return {
            "config_status": cls._config_status,
            "config_path": cls._config_path,
            "config_loaded": bool(cls._config),
        }

    @classmethod
    def _validate_logging_level(cls) -> None:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        logging_config = cls._config.get("logging", {}) or {}
        level = str(logging_config.get("level", "INFO")).upper()
        if level not in valid_levels:
            logging.warning(
                f"Invalid logging level '{level}' in config. Defaulting to 'INFO'."
            )
            logging_cfg = cls._config.setdefault("logging", {})
            logging_cfg["level"] = "INFO"

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Retrieves a value from the configuration.

        Dotted keys walk nested mappings, so ``get("roles.jammer")`` reads
        ``config["roles"]["jammer"]``.
        """
        current: Any = cls._config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current if current is not None else default

    @classmethod
    def get_role_names(cls) -> tuple[str, str]:
        """Return the (jammer, organizer) role names."""
        return (
            str(cls.get("roles.jammer", DEFAULT_JAMMER_ROLE)),
            str(cls.get("roles.organizer", DEFAULT_ORGANIZER_ROLE)),
        )

    @classmethod
    def get_self_assignable_roles(cls) -> list[str]:
        roles = cls.get("roles.self_assignable", [])
        if not isinstance(roles, list):
            logging.warning("roles.self_assignable should be a list; ignoring %r", roles)
            return []
        return [str(r) for r in roles]

    @classmethod
    def get_storage_path(cls, key: str, default: str) -> Path:
        """Resolve a ``storage.*`` file path; relative paths hang off the project root."""
        path = Path(str(cls.get(f"storage.{key}", default)))
        if not path.is_absolute():
            path = _get_project_root() / path
        return path

    @classmethod
    def reset(cls) -> None:
        """Reset the config loader state (useful for testing)."""
        cls._config = {}
        cls._config_status = "not_loaded"
        cls._config_path = None


# ---------------------------------------------------------------------------
# Prefix Normalization
# ---------------------------------------------------------------------------

MAX_PREFIX_LENGTH = 10
MAX_PREFIX_COUNT = 5


@dataclass
class _PrefixContext:
    normalized: list[str]
    seen: set[str]
    warnings: list[str]
    logger: logging.Logger


def _record_warning(msg: str, ctx: _PrefixContext) -> None:
    ctx.warnings.append(msg)
    ctx.logger.warning(msg)


def _validate_and_add_prefix(prefix: str, source_desc: str, ctx: _PrefixContext) -> None:
    """Validate a prefix and add it to normalized if valid."""
    trimmed = prefix.strip()
    if not trimmed:
        _record_warning(f"Whitespace-only prefix from {source_desc} ignored", ctx)
        return

    if not trimmed.isascii():
        _record_warning(
            f"Non-ASCII prefix '{trimmed[:20]}...' from {source_desc} rejected", ctx
        )
        return

    if "`" in trimmed or "\n" in trimmed:
        _record_warning(
            f"Prefix contains disallowed characters (backtick/newline) from {source_desc}",
            ctx,
        )
        return

    if len(trimmed) > MAX_PREFIX_LENGTH:
        _record_warning(
            f"Prefix '{trimmed[:MAX_PREFIX_LENGTH]}...' exceeds max length "
            f"{MAX_PREFIX_LENGTH}; truncated",
            ctx,
        )
        trimmed = trimmed[:MAX_PREFIX_LENGTH]

    if len(ctx.normalized) >= MAX_PREFIX_COUNT:
        _record_warning(
            f"Prefix count limit ({MAX_PREFIX_COUNT}) reached; '{trimmed}' ignored", ctx
        )
        return

    if trimmed in ctx.seen:
        ctx.logger.debug("Duplicate prefix '%s' ignored", trimmed)
        return

    ctx.seen.add(trimmed)
    ctx.normalized.append(trimmed)


def normalize_prefix(raw_prefix: Any) -> tuple[list[str], list[str]]:
    """
    Normalize command prefix configuration to a safe, validated list.

    Args:
        raw_prefix: The raw ``bot.prefix`` value. Can be None, str, list, or other.
            None falls back to DEFAULT_PREFIX.

    Returns:
        Tuple of (normalized_prefixes, warnings). An empty prefix list means
        the bot responds to mentions only.
    """
    logger = logging.getLogger(__name__)
    ctx = _PrefixContext(normalized=[], seen=set(), warnings=[], logger=logger)

    if raw_prefix is None:
        raw_prefix = DEFAULT_PREFIX

    if isinstance(raw_prefix, str):
        if not raw_prefix.strip():
            logger.info("Empty string prefix; bot will respond to mentions only")
        else:
            _validate_and_add_prefix(raw_prefix, "string config", ctx)
    elif isinstance(raw_prefix, list):
        for i, item in enumerate(raw_prefix):
            if isinstance(item, str):
                _validate_and_add_prefix(item, f"list item {i}", ctx)
            else:
                _record_warning(
                    f"Non-string item at index {i} (type={type(item).__name__}) "
                    "in prefix list ignored",
                    ctx,
                )
    else:
        _record_warning(
            f"Invalid prefix type {type(raw_prefix).__name__}; falling back to mention-only",
            ctx,
        )
        return [], ctx.warnings

    if ctx.normalized:
        logger.info("Command prefix set to %s", ctx.normalized)
    else:
        logger.info("No valid prefixes after normalization; bot will respond to mentions only")

    return ctx.normalized, ctx.warnings
