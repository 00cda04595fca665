import logging

import pytest

from metarbot.bot.applier import apply_response
from metarbot.bot.response import Ignore, Join, Notice, Part, Privmsg, Quit
from metarbot.logging_config import error_aggregator
from tests.fixtures.irc_fixtures import FakeConnection


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response,expected",
    [
        (Quit(), ("quit", None)),
        (Quit("bye"), ("quit", "bye")),
        (Part("#wx"), ("part", "#wx", None)),
        (Part("#wx", "later"), ("part", "#wx", "later")),
        (Join("#wx"), ("join", "#wx")),
        (Privmsg("#wx", "KJFK 181651Z"), ("privmsg", "#wx", "KJFK 181651Z")),
        (Notice("alice", "denied"), ("notice", "alice", "denied")),
    ],
)
async def test_each_response_maps_to_one_action(connection, response, expected):
    assert await apply_response(connection, response) is True
    assert connection.actions == [expected]


@pytest.mark.asyncio
async def test_ignore_sends_nothing(connection):
    assert await apply_response(connection, Ignore()) is False
    assert connection.actions == []


@pytest.mark.asyncio
async def test_transport_failure_is_reported_and_swallowed(caplog):
    connection = FakeConnection(fail_on={"join"})
    with caplog.at_level(logging.ERROR):
        assert await apply_response(connection, Join("#wx")) is False
    assert connection.actions == []
    assert any("[NETWORK] Error handling response" in r.getMessage() for r in caplog.records)
    assert error_aggregator.get_error_summary()["network"]["total_count"] == 1
