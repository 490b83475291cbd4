"""
swgohhelp Constants Module

Centralized constants for the API client, caches and command line.
"""

from .api import ContentTypes, HTTPHeaders, StatCalcConfig, SwgohHelpConfig
from .cache import BASE_DAY, BASE_HOUR, BASE_MINUTE, CacheConfig
from .cli import CLICommands, CLIDefaults, CLIHelp

__all__ = [
    "BASE_DAY",
    "BASE_HOUR",
    "BASE_MINUTE",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CacheConfig",
    "ContentTypes",
    "HTTPHeaders",
    "StatCalcConfig",
    "SwgohHelpConfig",
]
