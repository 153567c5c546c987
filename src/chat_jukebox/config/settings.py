"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.music.value_objects import ProviderName
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import PortInt


class ApiSettings(BaseModel):
    """HTTP API configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = True
    host: str = "127.0.0.1"
    port: PortInt = 8080
    username: str = Field(
        default="musicbot", min_length=1, validation_alias=AliasChoices("username", "user")
    )
    password: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("password", "pass")
    )


class DiscordSettings(BaseModel):
    """Discord chat adapter configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = True
    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    command_prefix: str = Field(
        default="!music",
        min_length=1,
        max_length=20,
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )
    announce_channel_id: int | None = Field(
        default=None, validation_alias=AliasChoices("announce_channel_id", "announce_channel")
    )


class PlayerSettings(BaseModel):
    """Queue and playback configuration."""

    model_config = SettingsConfigDict(frozen=True)

    default_volume: int = Field(default=50, ge=0, le=100)
    volume_step: int = Field(default=10, ge=1, le=100)
    tick_interval_seconds: float = Field(default=0.5, gt=0.0, le=60.0)
    autoplay: bool = False
    queue_preview_size: int = Field(default=5, ge=0, le=50)
    search_limit: int = Field(default=5, ge=1, le=25)


class ProviderSettings(BaseModel):
    """Metadata provider configuration."""

    model_config = SettingsConfigDict(frozen=True)

    timeout_seconds: float = Field(default=15.0, gt=0.0, le=300.0)
    ytdlp_format: str = "bestaudio/best"
    enabled: tuple[ProviderName, ...] = (ProviderName.YOUTUBE, ProviderName.SOUNDCLOUD)

    @field_validator("enabled", mode="before")
    @classmethod
    def validate_enabled(cls, v: object) -> object:
        """Accept a comma-separated string as well as a JSON array."""
        if isinstance(v, str):
            return tuple(part.strip().lower() for part in v.split(",") if part.strip())
        return v


class WhitelistSettings(BaseModel):
    """Identities seeded into the whitelist at startup."""

    model_config = SettingsConfigDict(frozen=True)

    members: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("members", mode="before")
    @classmethod
    def validate_members(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            return tuple(str(m).strip() for m in v if str(m).strip())
        return v


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - API__PORT, API__PASSWORD, etc. (nested with ``__``)
    - DISCORD__TOKEN, DISCORD__ANNOUNCE_CHANNEL_ID
    - PLAYER__DEFAULT_VOLUME, PLAYER__AUTOPLAY
    - PROVIDERS__TIMEOUT_SECONDS, PROVIDERS__ENABLED (JSON array)
    - WHITELIST__MEMBERS (JSON array)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    api: ApiSettings = Field(default_factory=ApiSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    player: PlayerSettings = Field(default_factory=PlayerSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    whitelist: WhitelistSettings = Field(default_factory=WhitelistSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=sorted(valid_levels))
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
