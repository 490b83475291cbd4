"""
API Configuration Constants

This module contains all constants related to the swgoh.help profile API,
the game data catalog and the stat calculation service.
"""

from typing import ClassVar


class SwgohHelpConfig:
    """swgoh.help API constants."""

    # Endpoints
    BASE_URL = "https://api.swgoh.help"
    SIGNIN_ENDPOINT = "/auth/signin"
    PLAYER_ENDPOINT = "/swgoh/player"
    DATA_ENDPOINT = "/swgoh/data"

    # Sign-in form fields
    GRANT_TYPE = "password"
    DEFAULT_CLIENT_ID = "123"
    DEFAULT_CLIENT_SECRET = "abc"  # noqa: S105  # nosec B105 - public default of the API docs

    # Query defaults
    DEFAULT_LANGUAGE = "eng_us"

    # Field projection requested for player profiles
    PLAYER_PROJECTION: ClassVar[dict[str, int]] = {
        "id": 1,
        "allyCode": 1,
        "name": 1,
        "level": 1,
        "stats": 1,
        "arena": 1,
        "roster": 1,
        "guildName": 1,
        "guildRefId": 1,
        "titles": 1,
        "updated": 1,
    }

    # Title catalog collection
    TITLE_COLLECTION = "playerTitleList"
    TITLE_PROJECTION: ClassVar[dict[str, int]] = {
        "id": 1,
        "nameKey": 1,
        "descKey": 1,
        "details": 1,
    }


class StatCalcConfig:
    """Stat calculation service constants."""

    BASE_URL = "https://crinolo-swgoh.glitch.me/statCalc/api/characters/"
    DEFAULT_FLAGS: ClassVar[tuple[str, ...]] = ("withModCalc", "gameStyle")


class ContentTypes:
    """Request content types."""

    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"


class HTTPHeaders:
    """Header names and values."""

    AUTHORIZATION = "Authorization"
    CONTENT_TYPE = "Content-Type"
    BEARER_PREFIX = "Bearer "
    MASKED_VALUE = "****"
