"""Configuration package exports."""

from .config_loader import ConfigLoader
from .model import BotConfig, OwnerRule, parse_owner_rules
from .repository import ConfigRepository


def get_configuration(config_file: str | None = None) -> BotConfig:
    """Load and validate ``config_file``, or the file named by the environment."""
    return ConfigLoader().get_configuration(config_file)


__all__ = [
    "BotConfig",
    "ConfigLoader",
    "ConfigRepository",
    "OwnerRule",
    "get_configuration",
    "parse_owner_rules",
]
