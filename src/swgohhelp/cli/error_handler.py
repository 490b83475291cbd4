"""
CLI Error Handling Utilities

Maps exceptions raised by commands to a stderr message and an exit code.
"""

from __future__ import annotations

import logging

import typer

from swgohhelp.shared.constants import CLIDefaults
from swgohhelp.shared.errors import SwgohHelpError
from swgohhelp.shared.logging import log_operation_error

logger = logging.getLogger(__name__)


def handle_cli_error(error: Exception, command: str) -> int:
    """Report ``error`` and return the exit code for ``command``.

    Known errors print their message and exit with 1; anything else is
    logged with its traceback and exits with 2.
    """
    if isinstance(error, SwgohHelpError):
        log_operation_error(logger, error, operation=command, level=logging.DEBUG)
        typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
        return CLIDefaults.EXIT_ERROR

    logger.exception("Unexpected error in command '%s'", command)
    typer.secho(f"Unexpected error: {error}", fg=typer.colors.RED, err=True)
    return CLIDefaults.EXIT_UNEXPECTED
