from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest

from metarbot.config.model import BotConfig
from metarbot.constants import CONFIG_FILE_ENV
from metarbot.errors.internal import TransportError
from metarbot.main import health_check, main, parse_args, run, run_bot
from tests.fixtures.irc_fixtures import FakeConnection, privmsg
from tests.fixtures.sample_configs import FULL_CONFIG, MINIMAL_CONFIG


class ScriptedIRC(FakeConnection):
    """FakeConnection that plays a fixed inbound script.

    The stream stays open until the bot has quit so the quit response is
    applied before the loop ends.
    """

    instances: list[ScriptedIRC] = []

    def __init__(self, config: BotConfig):
        super().__init__()
        self.config = config
        self.script = [privmsg("#aviation", "&quit see you")]
        self.quit_seen = asyncio.Event()
        self.connected = False
        self.disconnected = False
        ScriptedIRC.instances.append(self)

    async def connect(self) -> None:
        self.connected = True

    async def quit(self, message: str | None = None) -> None:
        await super().quit(message)
        self.quit_seen.set()

    async def messages(self):
        for message in self.script:
            yield message
        await self.quit_seen.wait()

    async def disconnect(self) -> None:
        self.disconnected = True


@pytest.fixture(autouse=True)
def reset_instances():
    ScriptedIRC.instances.clear()
    yield
    ScriptedIRC.instances.clear()


@pytest.mark.asyncio
async def test_run_bot_serves_owner_quit():
    config = BotConfig.from_dict(
        {**MINIMAL_CONFIG, "options": {"leader": "&", "owners": "alice!*@*.example.org"}}
    )
    with patch("metarbot.main.IRCConnection", ScriptedIRC):
        await asyncio.wait_for(run_bot(config), 2)
    irc = ScriptedIRC.instances[0]
    assert irc.connected and irc.disconnected
    assert irc.actions == [("quit", "see you")]


@pytest.mark.asyncio
async def test_run_bot_disconnects_on_transport_error():
    class BrokenIRC(ScriptedIRC):
        async def messages(self):
            raise TransportError("Connection lost: reset")
            yield  # pragma: no cover

    config = BotConfig.from_dict(MINIMAL_CONFIG)
    with patch("metarbot.main.IRCConnection", BrokenIRC), pytest.raises(TransportError):
        await run_bot(config)
    assert ScriptedIRC.instances[0].disconnected


@pytest.mark.asyncio
async def test_main_exits_on_transport_error():
    config = BotConfig.from_dict(MINIMAL_CONFIG)
    with patch("metarbot.main.get_configuration", return_value=config), patch(
        "metarbot.main.run_bot", new_callable=AsyncMock, side_effect=TransportError("refused")
    ), pytest.raises(SystemExit) as exc:
        await main()
    assert exc.value.code == 1


@pytest.mark.asyncio
async def test_main_runs_bot_with_loaded_config():
    config = BotConfig.from_dict(MINIMAL_CONFIG)
    with patch("metarbot.main.get_configuration", return_value=config), patch(
        "metarbot.main.run_bot", new_callable=AsyncMock
    ) as mock_run_bot:
        await main()
    mock_run_bot.assert_awaited_once_with(config)


def test_health_check_passes(tmp_path, monkeypatch):
    path = tmp_path / "metarbot.conf"
    path.write_text(json.dumps(FULL_CONFIG))
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    assert health_check() == 0


def test_health_check_fails_without_config(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "missing.conf"))
    assert health_check() == 1


def test_run_health_check_flag(monkeypatch):
    monkeypatch.setattr("sys.argv", ["metarbot", "--health-check"])
    with patch("metarbot.main.LoggerConfigurator") as mock_configurator, patch(
        "metarbot.main.health_check", return_value=0
    ), pytest.raises(SystemExit) as exc:
        run()
    mock_configurator.return_value.configure.assert_called_once()
    assert exc.value.code == 0


def test_health_check_config_file_overrides_env(tmp_path, monkeypatch):
    path = tmp_path / "other.conf"
    path.write_text(json.dumps(MINIMAL_CONFIG))
    monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "missing.conf"))
    assert health_check(str(path)) == 0


def test_parse_args():
    args = parse_args(["--config-file", "/etc/metarbot.conf", "--health-check"])
    assert args.config_file == "/etc/metarbot.conf"
    assert args.health_check is True
    defaults = parse_args([])
    assert defaults.config_file is None
    assert defaults.health_check is False


def test_run_passes_config_file_to_health_check():
    with patch("metarbot.main.LoggerConfigurator"), patch(
        "metarbot.main.health_check", return_value=1
    ) as mock_health_check, pytest.raises(SystemExit) as exc:
        run(["--config-file", "bot.conf", "--health-check"])
    mock_health_check.assert_called_once_with("bot.conf")
    assert exc.value.code == 1


def test_run_passes_config_file_to_main():
    with patch("metarbot.main.LoggerConfigurator"), patch(
        "metarbot.main.main", new_callable=AsyncMock
    ) as mock_main:
        run(["--config-file", "bot.conf"])
    mock_main.assert_awaited_once_with("bot.conf")


@pytest.mark.asyncio
async def test_main_loads_given_config_file():
    config = BotConfig.from_dict(MINIMAL_CONFIG)
    with patch("metarbot.main.get_configuration", return_value=config) as mock_get_config, patch(
        "metarbot.main.run_bot", new_callable=AsyncMock
    ):
        await main("bot.conf")
    mock_get_config.assert_called_once_with("bot.conf")
