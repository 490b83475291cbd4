"""
swgohhelp Typer CLI Application

A thin command-line surface over SwgohHelpClient: fetch player profiles
and manage the local caches.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import orjson
import typer
from rich.console import Console
from rich.table import Table

from swgohhelp.cli.error_handler import handle_cli_error
from swgohhelp.config.loader import get_config, reload_config
from swgohhelp.config.models.settings import Settings
from swgohhelp.services.ally_codes import format_ally_code
from swgohhelp.services.swgoh_client import SwgohHelpClient
from swgohhelp.services.swgoh_models import Player
from swgohhelp.shared.constants import CLICommands, CLIDefaults, CLIHelp
from swgohhelp.shared.logging import setup_structured_logger

console = Console()

app = typer.Typer(
    name=CLIDefaults.APP_NAME,
    help=CLIDefaults.APP_DESCRIPTION,
    no_args_is_help=True,
)
cache_app = typer.Typer(help=CLIHelp.CACHE_HELP, no_args_is_help=True)
app.add_typer(cache_app, name=CLICommands.CACHE)


class _State:
    config_path: Path | None = None
    log_level: str | None = None


state = _State()


def _load_settings() -> Settings:
    # --config replaces the shared settings, otherwise the cached ones are used
    settings = reload_config(state.config_path) if state.config_path else get_config()
    setup_structured_logger(
        level=state.log_level or settings.logging.level,
        log_file=settings.logging.file,
        use_rich_console=settings.logging.rich_console,
    )
    return settings


@app.callback()
def main(
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help=CLIHelp.CONFIG_HELP, dir_okay=False),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help=CLIHelp.LOG_LEVEL_HELP),
    ] = None,
) -> None:
    """Fetch enriched player profiles from the swgoh.help API."""
    state.config_path = config
    state.log_level = log_level


def _render_table(players: list[Player]) -> None:
    table = Table(title="Players")
    table.add_column("Name", style="bold")
    table.add_column("Ally code")
    table.add_column("Level", justify="right")
    table.add_column("Guild")
    table.add_column("Title")
    table.add_column("Units", justify="right")
    for player in players:
        table.add_row(
            player.name,
            format_ally_code(player.ally_code),
            str(player.level),
            player.guild_name,
            player.titles.selected or "",
            str(len(player.roster)),
        )
    console.print(table)


@app.command(CLICommands.PLAYERS, help=CLIHelp.PLAYERS_HELP)
def players_command(
    ally_codes: Annotated[list[str], typer.Argument(help=CLIHelp.ALLY_CODES_HELP)],
    json_output: Annotated[bool, typer.Option("--json", help=CLIHelp.JSON_HELP)] = False,
    debug: Annotated[bool, typer.Option("--debug", help=CLIHelp.DEBUG_HELP)] = False,
) -> None:
    try:
        settings = _load_settings()
        with SwgohHelpClient.from_settings(settings) as client:
            if debug:
                client.set_debug(True)
            client.sign_in()
            players = client.players(*ally_codes)
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.PLAYERS)) from e

    if json_output:
        payload = orjson.dumps([player.to_api_dict() for player in players], option=orjson.OPT_INDENT_2)
        typer.echo(payload.decode("utf-8"))
    else:
        _render_table(players)


@cache_app.command(CLICommands.CACHE_INFO, help=CLIHelp.CACHE_INFO_HELP)
def cache_info_command() -> None:
    try:
        settings = _load_settings()
        client = SwgohHelpClient.from_settings(settings)
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.CACHE_INFO)) from e

    table = Table(title="Caches")
    table.add_column("Cache")
    table.add_column("Entries", justify="right")
    table.add_column("TTL (s)", justify="right")
    table.add_column("File")
    for store in (client.game_data_cache, client.player_cache):
        table.add_row(
            store.name,
            str(len(store)),
            str(int(store.ttl)),
            str(store.path) if store.path else "(in memory)",
        )
    client.close()
    console.print(table)


@cache_app.command(CLICommands.CACHE_CLEAR, help=CLIHelp.CACHE_CLEAR_HELP)
def cache_clear_command(
    players: Annotated[bool, typer.Option("--players/--no-players")] = True,
    game_data: Annotated[bool, typer.Option("--game-data/--no-game-data")] = True,
) -> None:
    try:
        settings = _load_settings()
        client = SwgohHelpClient.from_settings(settings)
    except Exception as e:  # noqa: BLE001
        raise typer.Exit(handle_cli_error(e, CLICommands.CACHE_CLEAR)) from e

    cleared = []
    if players:
        client.player_cache.clear()
        cleared.append(client.player_cache.name)
    if game_data:
        client.game_data_cache.clear()
        cleared.append(client.game_data_cache.name)
    client.close()
    typer.echo(f"Cleared: {', '.join(cleared) if cleared else 'nothing'}")
