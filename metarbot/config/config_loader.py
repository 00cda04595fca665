"""Configuration loading utilities."""

from __future__ import annotations

import logging
import os
import sys

from pydantic import ValidationError

from ..constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE
from .model import BotConfig
from .repository import ConfigRepository


class ConfigLoader:
    """Loads and validates the bot configuration."""

    def config_path(self, override: str | None = None) -> str:
        """Path given on the command line, else the environment, else the default."""
        return override or os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)

    def load(self, config_file: str) -> BotConfig | None:
        """Load the configuration from ``config_file``.

        Returns:
            The validated BotConfig, or None when the file is missing or
            invalid (details are logged).
        """
        repo = ConfigRepository(config_file)
        raw = repo.load_raw()
        if not raw:
            logging.error(f"📁 No usable configuration found in {config_file}")
            return None
        try:
            config = BotConfig.from_dict(raw)
        except ValidationError as e:
            for err in e.errors():
                location = ".".join(str(part) for part in err["loc"]) or "<root>"
                logging.error(f"⚠️ Invalid configuration {location}: {err['msg']}")
            return None
        for rule in config.owner_rules():
            if rule.is_inert():
                logging.warning("⚠️ Ignoring owner rule with all fields empty")
        return config

    def get_configuration(self, config_file: str | None = None) -> BotConfig:
        """Load ``config_file``, or the file named by the environment.

        Raises:
            SystemExit: If no valid configuration could be loaded.
        """
        config_file = self.config_path(config_file)
        config = self.load(config_file)
        if config is None:
            sys.exit(1)
        logging.info(
            f"✅ Configuration loaded server={config.server}:{config.port} nick={config.nickname}"
        )
        return config
