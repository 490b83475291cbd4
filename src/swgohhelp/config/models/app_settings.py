"""Logging configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoggingSettings(BaseModel):
    """Logging configuration.

    Controls the log level, the optional JSON log file and whether the
    console uses the Rich handler.
    """

    level: str = Field(default="INFO", description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(default=True, description="Use Rich console output")


__all__ = ["LoggingSettings"]
