#!/usr/bin/env python3
"""
Main entry point for metarbot
"""

import argparse
import asyncio
import logging
import sys

import aiohttp

from .bot.dispatcher import CommandDispatcher
from .config import BotConfig, ConfigLoader, get_configuration
from .constants import CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE, HTTP_USER_AGENT
from .errors.handling import log_error
from .errors.internal import TransportError
from .irc.connection import IRCConnection
from .logging_config import LoggerConfigurator
from .modules import build_registry


async def run_bot(config: BotConfig) -> None:
    """Connect once and serve commands until the server closes the connection.

    One HTTP session is shared by every command for the lifetime of the
    connection.
    """
    connection = IRCConnection(config)
    async with aiohttp.ClientSession(headers={"User-Agent": HTTP_USER_AGENT}) as http:
        registry = build_registry(http)
        dispatcher = CommandDispatcher.from_config(connection, registry, config)
        await connection.connect()
        try:
            await dispatcher.run(connection.messages())
        finally:
            await connection.disconnect()


async def main(config_file: str | None = None) -> None:
    """Load configuration and run the bot.

    Raises:
        SystemExit: If configuration is invalid or the connection fails.
    """
    try:
        logging.info("🚀 Starting metarbot")
        config = get_configuration(config_file)
        await run_bot(config)
    except asyncio.CancelledError:
        raise
    except KeyboardInterrupt:
        pass
    except TransportError as e:
        log_error("Connection failed", e, context=e.data or None)
        sys.exit(1)
    except Exception as e:
        log_error("Main application error", e)
        sys.exit(1)
    finally:
        logging.info("✅ Application shutdown complete")


def health_check(config_file: str | None = None) -> int:
    """Validate the configuration without connecting; returns the exit status."""
    logging.info("🏥 Health check mode")
    loader = ConfigLoader()
    config = loader.load(loader.config_path(config_file))
    if config is None:
        logging.error("❌ Health check failed")
        return 1
    logging.info(f"✅ Health check passed - {len(config.owner_rules())} owner rule(s) configured")
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="metarbot", description="IRC bot answering METAR, TAF and weather queries"
    )
    parser.add_argument(
        "--config-file",
        help=f"JSON configuration file (default: ${CONFIG_FILE_ENV} or {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Validate the configuration and exit",
    )
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application."""
    args = parse_args(argv)
    LoggerConfigurator().configure()
    if args.health_check:
        sys.exit(health_check(args.config_file))
    try:
        asyncio.run(main(args.config_file))
    except KeyboardInterrupt:
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)


if __name__ == "__main__":
    run()
