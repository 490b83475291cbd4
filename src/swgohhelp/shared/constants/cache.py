"""
Cache Configuration Constants

TTLs, file names and keys for the two disk-backed caches: the long-lived
game data cache and the shorter-lived player profile cache.
"""

# Base time units for TTL calculations
BASE_SECOND = 1
BASE_MINUTE = 60 * BASE_SECOND
BASE_HOUR = 60 * BASE_MINUTE
BASE_DAY = 24 * BASE_HOUR


class CacheConfig:
    """Cache configuration constants."""

    # TTLs in seconds
    GAME_DATA_TTL = 7 * BASE_DAY  # catalogs rarely change
    PLAYER_TTL = BASE_DAY

    # File names under the platform cache directory
    GAME_DATA_FILE = "swgohhelp-gamedata.json"
    PLAYER_FILE = "swgohhelp-players.json"

    # Cache instance names
    GAME_DATA_NAME = "gamedata"
    PLAYER_NAME = "players"

    # Fixed keys in the game data cache
    TITLES_KEY = "titles"

    # On-disk document format
    FORMAT_VERSION = 1
    TEMP_SUFFIX = ".tmp"

    # Application directory name for the platform cache directory
    APP_DIR = "swgohhelp"
