"""Current weather conditions for a place, from OpenWeatherMap.

Needs the ``openweathermap_api_key`` option; ``weather_units`` selects
``metric`` (default), ``imperial`` or ``standard``.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from ..bot.command import BotCommand
from ..bot.response import BotParameters, Privmsg, Response
from ..constants import HTTP_REQUEST_TIMEOUT, OPENWEATHERMAP_API_URL
from ..errors.handling import handle_api_error
from ..errors.internal import NonSuccessResponse, NoResponseTarget, WeatherFetchError

API_KEY_OPTION = "openweathermap_api_key"
UNITS_OPTION = "weather_units"

_UNIT_SYMBOLS = {
    "metric": ("°C", "m/s"),
    "imperial": ("°F", "mph"),
    "standard": ("K", "m/s"),
}


def mk(http: aiohttp.ClientSession) -> list[BotCommand]:
    """Create the commands of this module."""
    return [WeatherCommand(http)]


async def fetch_current(
    http: aiohttp.ClientSession, api_key: str, place: str, units: str
) -> dict[str, Any]:
    async def operation() -> dict[str, Any]:
        async with http.get(
            OPENWEATHERMAP_API_URL,
            params={"q": place, "appid": api_key, "units": units},
            headers={"Accept": "application/json"},
            timeout=aiohttp.ClientTimeout(total=HTTP_REQUEST_TIMEOUT),
        ) as resp:
            if resp.status == 404:
                raise WeatherFetchError(f"Unknown place {place}")
            if not 200 <= resp.status < 300:
                raise NonSuccessResponse(resp.status, resp.reason)
            try:
                data = await resp.json(content_type=None)
            except ValueError as e:
                raise WeatherFetchError("Invalid JSON response") from e
        if not isinstance(data, dict):
            raise WeatherFetchError("Unexpected response format")
        return data

    return await handle_api_error(operation, f"weather {place}")


def format_current(data: dict[str, Any], units: str) -> str:
    """Render the OpenWeatherMap current weather payload as one line."""
    temp_unit, speed_unit = _UNIT_SYMBOLS.get(units, _UNIT_SYMBOLS["metric"])
    try:
        name = data["name"]
        country = data.get("sys", {}).get("country")
        description = data["weather"][0]["description"]
        main = data["main"]
        wind = data.get("wind", {})
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise WeatherFetchError("Unexpected response format") from e

    location = f"{name}, {country}" if country else name
    parts = [f"{location}: {description}", f"{main.get('temp')}{temp_unit}"]
    if "humidity" in main:
        parts.append(f"humidity {main['humidity']}%")
    if "speed" in wind:
        parts.append(f"wind {wind['speed']} {speed_unit}")
    return ", ".join(parts)


class WeatherCommand(BotCommand):
    trigger = "weather"

    def __init__(self, http: aiohttp.ClientSession):
        self.http = http

    async def handle(self, params: BotParameters) -> Response:
        response_target = params.message.response_target()
        if response_target is None:
            raise NoResponseTarget()

        api_key = params.require_option(API_KEY_OPTION)

        if not params.args:
            return Privmsg(response_target, f"Usage: {params.leader}weather <place>")

        place = " ".join(params.args)
        units = params.options.get(UNITS_OPTION, "metric").lower()
        if units not in _UNIT_SYMBOLS:
            units = "metric"
        try:
            data = await fetch_current(self.http, api_key, place, units)
            text = format_current(data, units)
        except WeatherFetchError as e:
            text = f"Error: {e}"
        logging.info(f"🌦️ Weather for {place}: {text}")
        return Privmsg(response_target, text)
