"""
swgohhelp Package Main Entry Point

Runs the command line when invoked as ``python -m swgohhelp``.
"""

import logging
import sys

from swgohhelp.cli.typer_app import app
from swgohhelp.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_ERROR)


if __name__ == "__main__":
    main()
