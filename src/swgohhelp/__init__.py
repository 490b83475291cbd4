"""
swgohhelp - swgoh.help API client

Fetches player profiles from the swgoh.help API, enriches them with title
names and recalculated roster stats, and caches the results on disk.
"""

__version__ = "0.1.0"

from .services import CacheStore, Player, PlayerTitle, SwgohHelpClient, Unit, parse_ally_codes
from .shared.errors import (
    AuthError,
    CacheError,
    ParseError,
    ProtocolError,
    SwgohHelpError,
    TransportError,
)

__all__ = [
    "AuthError",
    "CacheError",
    "CacheStore",
    "ParseError",
    "Player",
    "PlayerTitle",
    "ProtocolError",
    "SwgohHelpClient",
    "SwgohHelpError",
    "TransportError",
    "Unit",
    "parse_ally_codes",
]
