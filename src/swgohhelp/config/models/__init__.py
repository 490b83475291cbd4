"""Configuration models for swgohhelp."""

from __future__ import annotations

from .api_settings import APISettings, StatCalcSettings, SwgohHelpSettings
from .app_settings import LoggingSettings
from .cache_settings import CacheSettings
from .settings import Settings

__all__ = [
    "APISettings",
    "CacheSettings",
    "LoggingSettings",
    "Settings",
    "StatCalcSettings",
    "SwgohHelpSettings",
]
