"""
CLI Configuration Constants
"""


class CLIDefaults:
    """CLI default values."""

    APP_NAME = "swgohhelp"
    APP_DESCRIPTION = "Fetch enriched player profiles from the swgoh.help API."
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_UNEXPECTED = 2


class CLICommands:
    """Command names."""

    PLAYERS = "players"
    CACHE = "cache"
    CACHE_INFO = "info"
    CACHE_CLEAR = "clear"


class CLIHelp:
    """Help texts."""

    PLAYERS_HELP = "Fetch player profiles for one or more ally codes."
    ALLY_CODES_HELP = "Ally codes, with or without dashes (e.g. 265-924-989)."
    JSON_HELP = "Print the result as JSON instead of a table."
    DEBUG_HELP = "Write raw request/response dumps to the temp directory."
    LOG_LEVEL_HELP = "Log level (DEBUG, INFO, WARNING, ERROR)."
    CONFIG_HELP = "Path to a TOML configuration file."
    CACHE_HELP = "Inspect or clear the local caches."
    CACHE_INFO_HELP = "Show cache locations and entry counts."
    CACHE_CLEAR_HELP = "Remove cached entries."
