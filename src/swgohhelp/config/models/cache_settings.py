"""Cache configuration model.

TTLs and file names for the game data and player caches.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from swgohhelp.shared.constants import CacheConfig


class CacheSettings(BaseModel):
    """Cache configuration."""

    enabled: bool = Field(default=True, description="Persist caches to disk")
    directory: Path | None = Field(
        default=None,
        description="Cache directory (defaults to the platform cache directory)",
    )
    game_data_ttl: int = Field(
        default=CacheConfig.GAME_DATA_TTL,
        gt=0,
        description="Game data time-to-live in seconds",
    )
    player_ttl: int = Field(
        default=CacheConfig.PLAYER_TTL,
        gt=0,
        description="Player profile time-to-live in seconds",
    )
    game_data_file: str = Field(default=CacheConfig.GAME_DATA_FILE)
    player_file: str = Field(default=CacheConfig.PLAYER_FILE)


__all__ = ["CacheSettings"]
