"""METAR and TAF reports, downloaded from api.met.no."""

from __future__ import annotations

import logging
import re
from enum import Enum

import aiohttp

from ..bot.command import BotCommand
from ..bot.response import BotParameters, Privmsg, Response
from ..constants import HTTP_REQUEST_TIMEOUT, METAR_API_URL, TAF_API_URL
from ..errors.handling import handle_api_error
from ..errors.internal import (
    EmptyResponse,
    NonSuccessResponse,
    NoResponseTarget,
    WeatherFetchError,
)

AIRPORT_RE = re.compile(r"^[a-z0-9]{4}$", re.IGNORECASE)


class WeatherType(Enum):
    METAR = "METAR"
    TAF = "TAF"

    @property
    def url(self) -> str:
        return METAR_API_URL if self is WeatherType.METAR else TAF_API_URL

    def __str__(self) -> str:
        return self.value


def mk(http: aiohttp.ClientSession) -> list[BotCommand]:
    """Create the commands of this module."""
    return [MetarCommand(http), TafCommand(http)]


def last_report_line(text: str) -> str:
    """Return the most recent report, i.e. the last non-blank line.

    Raises:
        EmptyResponse: If the body holds no report at all.
    """
    for line in reversed(text.splitlines()):
        if line.strip():
            return line.strip()
    raise EmptyResponse()


async def download(
    http: aiohttp.ClientSession, weather_type: WeatherType, airport: str
) -> str:
    """Fetch the latest report of ``weather_type`` for ``airport``.

    Raises:
        WeatherFetchError: On HTTP errors, timeouts or an empty body.
    """

    async def operation() -> str:
        async with http.get(
            weather_type.url,
            params={"icao": airport},
            headers={"Accept": "text/plain"},
            timeout=aiohttp.ClientTimeout(total=HTTP_REQUEST_TIMEOUT),
        ) as resp:
            if not 200 <= resp.status < 300:
                raise NonSuccessResponse(resp.status, resp.reason)
            body = await resp.text()
        return last_report_line(body)

    return await handle_api_error(operation, f"{weather_type} {airport}")


class _AirportReportCommand(BotCommand):
    weather_type: WeatherType

    def __init__(self, http: aiohttp.ClientSession):
        self.http = http

    @property
    def trigger(self) -> str:
        return self.weather_type.value.lower()

    async def handle(self, params: BotParameters) -> Response:
        response_target = params.message.response_target()
        if response_target is None:
            raise NoResponseTarget()

        if not params.args:
            return Privmsg(
                response_target,
                f"Usage: {params.leader}{self.trigger} <4-letter ICAO airport code>",
            )

        airport = params.args[0]
        if not AIRPORT_RE.match(airport):
            return Privmsg(
                response_target,
                f"{airport} does not seem to be a valid ICAO airport code",
            )

        try:
            report = await download(self.http, self.weather_type, airport.upper())
        except WeatherFetchError as e:
            report = f"Error: {e}"
        logging.info(f"🛬 {airport.upper()} {self.weather_type}: {report}")
        return Privmsg(response_target, report)


class MetarCommand(_AirportReportCommand):
    weather_type = WeatherType.METAR


class TafCommand(_AirportReportCommand):
    weather_type = WeatherType.TAF
