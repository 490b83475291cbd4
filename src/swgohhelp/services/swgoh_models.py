"""swgoh.help API Response Models.

Pydantic models for player profiles and game data returned by the API.

Fields use the API's camelCase names as aliases and also accept the
snake_case attribute names. Unknown fields are kept (``extra="allow"``)
so a record written to the cache and read back is identical to the one
received, including stats added by the stat calculation service.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SwgohModel(BaseModel):
    """Base model for API payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_api_dict(self) -> dict[str, Any]:
        """Dump in the API's JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


class PlayerStat(SwgohModel):
    """A single profile statistic such as galactic power."""

    name_key: str = ""
    value: int | float = 0
    index: int = 0


class ArenaStanding(SwgohModel):
    """Rank and squad in one arena."""

    rank: int | None = None
    squad: list[dict[str, Any]] = Field(default_factory=list)


class PlayerArena(SwgohModel):
    """Squad and fleet arena standings."""

    char: ArenaStanding | None = None
    ship: ArenaStanding | None = None


class PlayerTitles(SwgohModel):
    """Selected and unlocked titles.

    Both hold catalog keys as returned by the API and display names once
    the record has been enriched.
    """

    selected: str | None = ""
    unlocked: list[str] = Field(default_factory=list)


class Unit(SwgohModel):
    """A roster entry: one character or ship owned by a player."""

    id: str = ""
    def_id: str = ""
    name_key: str = ""
    rarity: int = 0
    level: int = 0
    xp: int = 0
    gear: int = 0
    gp: int = 0
    combat_type: int = 0
    relic: dict[str, Any] | None = None
    equipped: list[dict[str, Any]] = Field(default_factory=list)
    skills: list[dict[str, Any]] = Field(default_factory=list)
    mods: list[dict[str, Any]] = Field(default_factory=list)
    crew: list[dict[str, Any]] = Field(default_factory=list)
    stats: dict[str, Any] | None = None


class Player(SwgohModel):
    """A player profile.

    Example:
        >>> player = Player.model_validate({"allyCode": 265924989, "name": "Rey"})
        >>> player.ally_code
        265924989
    """

    ally_code: int
    id: str = ""
    name: str = ""
    level: int = 0
    stats: list[PlayerStat] = Field(default_factory=list)
    arena: PlayerArena | None = None
    roster: list[Unit] = Field(default_factory=list)
    guild_name: str = ""
    guild_ref_id: str = ""
    titles: PlayerTitles = Field(default_factory=PlayerTitles)
    updated: int = 0

    @property
    def cache_key(self) -> str:
        return str(self.ally_code)


class PlayerTitle(SwgohModel):
    """Title catalog entry."""

    id: str
    name: str = Field(default="", alias="nameKey")
    desc: str = Field(default="", alias="descKey")
    details: Any = None


__all__ = [
    "ArenaStanding",
    "Player",
    "PlayerArena",
    "PlayerStat",
    "PlayerTitle",
    "PlayerTitles",
    "SwgohModel",
    "Unit",
]
