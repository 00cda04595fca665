"""
Configuration constants for metarbot

Each constant can be overridden by setting an environment variable with the
same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Falls back to the default (with a warning on stdout) when the variable is
    unset or not an integer.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable."""
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Configuration file
DEFAULT_CONFIG_FILE = "metarbot.conf"
CONFIG_FILE_ENV = "METARBOT_CONF_FILE"

# IRC transport
IRC_CONNECT_TIMEOUT = _get_env_float("IRC_CONNECT_TIMEOUT", 30.0)
IRC_READ_LIMIT = _get_env_int("IRC_READ_LIMIT", 64 * 1024)

# Command defaults
DEFAULT_LEADER = "&"

# Outbound HTTP requests made by commands
HTTP_REQUEST_TIMEOUT = _get_env_float("HTTP_REQUEST_TIMEOUT", 5.0)
HTTP_USER_AGENT = os.getenv(
    "HTTP_USER_AGENT", "metarbot/0.3 aiohttp"
)

METAR_API_URL = "https://api.met.no/weatherapi/tafmetar/1.0/metar"
TAF_API_URL = "https://api.met.no/weatherapi/tafmetar/1.0/taf"
OPENWEATHERMAP_API_URL = "https://api.openweathermap.org/data/2.5/weather"
