"""API configuration models.

Settings for the swgoh.help profile API and the stat calculation service.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from swgohhelp.shared.constants import StatCalcConfig, SwgohHelpConfig


class SwgohHelpSettings(BaseModel):
    """swgoh.help API configuration.

    Security: password and client_secret are masked in __repr__.
    """

    endpoint: str = Field(
        default=SwgohHelpConfig.BASE_URL,
        description="Base URL of the profile API",
    )
    username: str = Field(default="", description="Account user name")
    password: str = Field(default="", repr=False, description="Account password")
    client_id: str = Field(
        default=SwgohHelpConfig.DEFAULT_CLIENT_ID,
        description="OAuth client id sent on sign-in",
    )
    client_secret: str = Field(
        default=SwgohHelpConfig.DEFAULT_CLIENT_SECRET,
        repr=False,
        description="OAuth client secret sent on sign-in",
    )
    language: str = Field(
        default=SwgohHelpConfig.DEFAULT_LANGUAGE,
        description="Localization requested for names",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds (None waits indefinitely)",
    )
    debug: bool = Field(default=False, description="Write request/response trace files")

    @field_validator("endpoint")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def __repr__(self) -> str:
        masked = "****" if self.password else "[empty]"
        return (
            f"SwgohHelpSettings(endpoint={self.endpoint!r}, "
            f"username={self.username!r}, password={masked}, "
            f"language={self.language!r}, timeout={self.timeout})"
        )


class StatCalcSettings(BaseModel):
    """Stat calculation service configuration."""

    url: str = Field(default=StatCalcConfig.BASE_URL, description="Roster stat endpoint")
    flags: list[str] = Field(
        default_factory=lambda: list(StatCalcConfig.DEFAULT_FLAGS),
        description="Calculation flags sent as the 'flags' query parameter",
    )
    enabled: bool = Field(default=True, description="Overlay recalculated stats")
    max_workers: int = Field(
        default=1,
        ge=1,
        description="Parallel overlay calls (1 keeps them strictly sequential)",
    )


class APISettings(BaseModel):
    """API configuration container."""

    swgoh: SwgohHelpSettings = Field(default_factory=SwgohHelpSettings)
    stat_calc: StatCalcSettings = Field(default_factory=StatCalcSettings)


__all__ = [
    "APISettings",
    "StatCalcSettings",
    "SwgohHelpSettings",
]
