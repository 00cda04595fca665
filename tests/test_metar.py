import aiohttp
import pytest

from metarbot.bot.response import BotParameters, Privmsg
from metarbot.constants import METAR_API_URL, TAF_API_URL
from metarbot.errors.internal import EmptyResponse, NoResponseTarget
from metarbot.modules.metar import MetarCommand, TafCommand, WeatherType, last_report_line, mk
from tests.fixtures.irc_fixtures import FakeResp, privmsg

METAR_BODY = (
    "KJFK 181551Z 31012KT 10SM FEW250 18/02 A3012\n"
    "KJFK 181651Z 31014G22KT 10SM FEW250 19/02 A3011\n"
    "\n"
)


def params_for(target, text, args=(), leaders="&"):
    return BotParameters(message=privmsg(target, text), leaders=leaders, args=tuple(args))


def test_last_report_line():
    assert last_report_line(METAR_BODY) == "KJFK 181651Z 31014G22KT 10SM FEW250 19/02 A3011"
    with pytest.raises(EmptyResponse):
        last_report_line(" \n\n")


def test_mk_and_triggers(http):
    assert [c.trigger for c in mk(http)] == ["metar", "taf"]
    assert WeatherType.TAF.url == TAF_API_URL


@pytest.mark.asyncio
async def test_metar_success(http):
    http.queue(FakeResp(200, METAR_BODY))
    result = await MetarCommand(http).handle(params_for("#wx", "&metar kjfk", ["kjfk"]))
    assert result == Privmsg("#wx", "KJFK 181651Z 31014G22KT 10SM FEW250 19/02 A3011")
    url, meta = http.requests[0]
    assert url == METAR_API_URL
    assert meta["params"] == {"icao": "KJFK"}
    assert meta["headers"]["Accept"] == "text/plain"
    assert isinstance(meta["timeout"], aiohttp.ClientTimeout)


@pytest.mark.asyncio
async def test_taf_in_query_replies_to_sender(http):
    http.queue(FakeResp(200, "TAF EDDF 181700Z 1818/1924 24010KT CAVOK\n"))
    result = await TafCommand(http).handle(params_for("metarbot", "taf EDDF", ["EDDF"], leaders=""))
    assert result == Privmsg("alice", "TAF EDDF 181700Z 1818/1924 24010KT CAVOK")
    assert http.requests[0][0] == TAF_API_URL


@pytest.mark.asyncio
async def test_usage_without_airport(http):
    result = await MetarCommand(http).handle(params_for("#wx", "&metar"))
    assert result == Privmsg("#wx", "Usage: &metar <4-letter ICAO airport code>")
    assert http.requests == []


@pytest.mark.asyncio
async def test_usage_in_query_has_no_leader(http):
    result = await TafCommand(http).handle(params_for("metarbot", "taf", leaders=""))
    assert result == Privmsg("alice", "Usage: taf <4-letter ICAO airport code>")


@pytest.mark.asyncio
@pytest.mark.parametrize("airport", ["JFK", "KJFKX", "K-FK"])
async def test_invalid_airport(http, airport):
    result = await MetarCommand(http).handle(params_for("#wx", f"&metar {airport}", [airport]))
    assert result == Privmsg("#wx", f"{airport} does not seem to be a valid ICAO airport code")
    assert http.requests == []


@pytest.mark.asyncio
async def test_non_success_status_is_reported(http):
    http.queue(FakeResp(404, "", reason="Not Found"))
    result = await MetarCommand(http).handle(params_for("#wx", "&metar ZZZZ", ["ZZZZ"]))
    assert result == Privmsg("#wx", "Error: 404 Not Found")


@pytest.mark.asyncio
async def test_empty_body_is_reported(http):
    http.queue(FakeResp(200, "\n"))
    result = await MetarCommand(http).handle(params_for("#wx", "&metar KJFK", ["KJFK"]))
    assert result == Privmsg("#wx", "Error: Received empty response")


@pytest.mark.asyncio
async def test_client_error_is_reported(http):
    http.queue(aiohttp.ClientConnectionError("refused"))
    result = await MetarCommand(http).handle(params_for("#wx", "&metar KJFK", ["KJFK"]))
    assert result == Privmsg("#wx", "Error: Request failed: ClientConnectionError")


@pytest.mark.asyncio
async def test_timeout_is_reported(http):
    http.queue(TimeoutError())
    result = await MetarCommand(http).handle(params_for("#wx", "&metar KJFK", ["KJFK"]))
    assert result == Privmsg("#wx", "Error: Request timed out")


@pytest.mark.asyncio
async def test_no_response_target(http):
    params = BotParameters(message=privmsg("metarbot", "metar KJFK", prefix=None), args=("KJFK",))
    with pytest.raises(NoResponseTarget):
        await MetarCommand(http).handle(params)
