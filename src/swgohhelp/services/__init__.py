"""Services module for swgohhelp.

Cache store, ally code parsing, the API clients and player enrichment.
"""

from .ally_codes import format_ally_code, parse_ally_code, parse_ally_codes
from .cache_store import CacheStore, resolve_cache_directory
from .enricher import PlayerEnricher
from .stat_calc import StatCalcClient
from .swgoh_client import SwgohHelpClient
from .swgoh_models import Player, PlayerTitle, Unit

__all__ = [
    "CacheStore",
    "Player",
    "PlayerEnricher",
    "PlayerTitle",
    "StatCalcClient",
    "SwgohHelpClient",
    "Unit",
    "format_ally_code",
    "parse_ally_code",
    "parse_ally_codes",
    "resolve_cache_directory",
]
