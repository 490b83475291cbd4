"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from swgohhelp.config.models.settings import Settings
from swgohhelp.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    create_config_error,
)

logger = logging.getLogger(__name__)

def _default_config_paths() -> list[Path]:
    """Configuration files tried in order when no path is given.

    The per-user file is skipped when no home directory can be resolved.
    """
    paths = [Path("swgohhelp.toml")]
    try:
        paths.append(Path.home() / ".config" / "swgohhelp" / "config.toml")
    except (RuntimeError, KeyError):
        logger.debug("No home directory, skipping per-user configuration")
    return paths


def _load_env_file(env_file: Path = Path(".env")) -> None:
    """Load environment variables from a .env file when one exists.

    Variables already present in the environment win.
    """
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug("Loaded environment from %s", env_file)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, the default
            locations are tried before falling back to environment only.

    Returns:
        The loaded Settings instance

    Raises:
        ApplicationError: If the file is missing, unreadable or invalid
    """
    _load_env_file()

    try:
        if config_path:
            return Settings.from_toml_file(config_path)

        for candidate in _default_config_paths():
            if candidate.exists():
                logger.debug("Using configuration file %s", candidate)
                return Settings.from_toml_file(candidate)

        return Settings()
    except FileNotFoundError as e:
        raise ApplicationError(
            code=ErrorCode.CONFIG_MISSING,
            message=str(e),
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(config_path)},
            ),
            original_error=e,
        ) from e
    except (ValidationError, ValueError, OSError) as e:
        # toml.TomlDecodeError is a ValueError
        raise create_config_error(
            f"Invalid configuration: {e}",
            config_key=str(config_path) if config_path else None,
            operation="load_settings",
            original_error=e,
        ) from e


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking to keep the fast path lock-free.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload and return the global settings instance."""
    return _loader.reload_config(config_path)
