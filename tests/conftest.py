import pytest

from metarbot.bot.auth import compile_pattern
from metarbot.config.model import OwnerRule
from metarbot.logging_config import error_aggregator
from tests.fixtures.irc_fixtures import FakeConnection, FakeSession


@pytest.fixture(autouse=True)
def _reset_shared_state():
    """Clear module level caches so tests don't see each other's patterns or errors."""
    error_aggregator.clear()
    yield
    compile_pattern.cache_clear()
    error_aggregator.clear()


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def http() -> FakeSession:
    return FakeSession()


@pytest.fixture
def owners() -> tuple[OwnerRule, ...]:
    return (OwnerRule("alice", "", "*.example.org"),)
