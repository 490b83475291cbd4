"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from swgohhelp.cli import typer_app
from swgohhelp.cli.typer_app import app
from swgohhelp.config.models import Settings
from swgohhelp.services.cache_store import CacheStore
from swgohhelp.services.swgoh_models import Player
from swgohhelp.shared.constants import CacheConfig
from swgohhelp.shared.errors import ErrorCode, ParseError, TransportError
from tests.helpers import player_payload

runner = CliRunner()


@pytest.fixture
def cli_settings(temp_dir: Path) -> Settings:
    return Settings(cache={"directory": temp_dir})


@pytest.fixture(autouse=True)
def patched_setup(mocker, cli_settings: Settings) -> MagicMock:
    """Load fixed settings and leave logging configuration alone."""
    mocker.patch("swgohhelp.cli.typer_app.setup_structured_logger")
    mocker.patch("swgohhelp.cli.typer_app.get_config", return_value=cli_settings)
    return mocker.patch("swgohhelp.cli.typer_app.reload_config", return_value=cli_settings)


@pytest.fixture
def mock_client(mocker) -> MagicMock:
    client = MagicMock()
    client.__enter__.return_value = client
    client.players.return_value = [
        Player.model_validate(player_payload(265924989, "Rey")),
    ]
    client_cls = mocker.patch("swgohhelp.cli.typer_app.SwgohHelpClient")
    client_cls.from_settings.return_value = client
    return client


class TestPlayersCommand:
    """Test the players command."""

    def test_table_output(self, mock_client: MagicMock) -> None:
        result = runner.invoke(app, ["players", "265-924-989"])

        assert result.exit_code == 0, result.output
        assert "Rey" in result.output
        assert "265-924-989" in result.output
        mock_client.sign_in.assert_called_once_with()
        mock_client.players.assert_called_once_with("265-924-989")

    def test_json_output(self, mock_client: MagicMock) -> None:
        result = runner.invoke(app, ["players", "--json", "265924989"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data[0]["allyCode"] == 265924989
        assert data[0]["name"] == "Rey"

    def test_debug_flag(self, mock_client: MagicMock) -> None:
        runner.invoke(app, ["players", "--debug", "265924989"])
        mock_client.set_debug.assert_called_once_with(True)

    def test_config_option_is_passed(self, mock_client: MagicMock, patched_setup: MagicMock, temp_dir: Path) -> None:
        config = temp_dir / "cli.toml"
        config.write_text("", encoding="utf-8")
        runner.invoke(app, ["--config", str(config), "players", "1"])
        patched_setup.assert_called_once_with(config)

    def test_cached_settings_without_config(self, mock_client: MagicMock, patched_setup: MagicMock) -> None:
        runner.invoke(app, ["players", "1"])
        typer_app.get_config.assert_called_once_with()
        patched_setup.assert_not_called()

    def test_parse_error_exit_code(self, mock_client: MagicMock) -> None:
        mock_client.players.side_effect = ParseError("abc")

        result = runner.invoke(app, ["players", "abc"])

        assert result.exit_code == 1
        assert "Invalid ally code" in result.output

    def test_transport_error_exit_code(self, mock_client: MagicMock) -> None:
        mock_client.sign_in.side_effect = TransportError(ErrorCode.NETWORK_ERROR, "unreachable")
        result = runner.invoke(app, ["players", "1"])
        assert result.exit_code == 1
        assert "unreachable" in result.output

    def test_unexpected_error_exit_code(self, mock_client: MagicMock) -> None:
        mock_client.players.side_effect = RuntimeError("bug")
        result = runner.invoke(app, ["players", "1"])
        assert result.exit_code == 2

    def test_requires_ally_code(self) -> None:
        result = runner.invoke(app, ["players"])
        assert result.exit_code != 0


class TestCacheCommands:
    """Test cache inspection and clearing against real cache files."""

    @pytest.fixture
    def filled_caches(self, temp_dir: Path) -> None:
        CacheStore(temp_dir / CacheConfig.PLAYER_FILE, 60, name=CacheConfig.PLAYER_NAME).put("1", {"name": "Rey"})
        CacheStore(temp_dir / CacheConfig.GAME_DATA_FILE, 60, name=CacheConfig.GAME_DATA_NAME).put("titles", {})

    def test_info(self, filled_caches: None) -> None:
        result = runner.invoke(app, ["cache", "info"])
        assert result.exit_code == 0, result.output
        assert CacheConfig.PLAYER_NAME in result.output
        assert CacheConfig.GAME_DATA_NAME in result.output

    def test_clear_all(self, filled_caches: None, temp_dir: Path) -> None:
        result = runner.invoke(app, ["cache", "clear"])

        assert result.exit_code == 0, result.output
        assert len(CacheStore(temp_dir / CacheConfig.PLAYER_FILE, 60)) == 0
        assert len(CacheStore(temp_dir / CacheConfig.GAME_DATA_FILE, 60)) == 0

    def test_clear_players_only(self, filled_caches: None, temp_dir: Path) -> None:
        result = runner.invoke(app, ["cache", "clear", "--no-game-data"])

        assert result.exit_code == 0, result.output
        assert len(CacheStore(temp_dir / CacheConfig.PLAYER_FILE, 60)) == 0
        assert len(CacheStore(temp_dir / CacheConfig.GAME_DATA_FILE, 60)) == 1
