"""
Configuration Management for Boodschappen

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The core (parser, ledger, interpreter) never reads settings itself;
the host wiring in orchestrator.py passes the values in.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where and how the ledger state is persisted."""

    model_config = SettingsConfigDict(
        env_prefix="BOODSCHAPPEN_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Storage backend: 'json' file or 'memory' (not persisted)"
    )
    state_path: str = Field(
        default="~/.config/boodschappen/state.json",
        description="Path of the JSON state file"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed state write is retried"
    )

    @property
    def resolved_state_path(self) -> Path:
        return Path(self.state_path).expanduser()


class ChatSettings(BaseSettings):
    """Defaults for the chat interpreter."""

    model_config = SettingsConfigDict(
        env_prefix="BOODSCHAPPEN_CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_currency: str = Field(
        default="EUR",
        min_length=3,
        max_length=3,
        description="ISO 4217 code for a fresh ledger"
    )

    @field_validator('default_currency')
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR)$",
        description="Minimum level for log output"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, v: str) -> str:
        return str(v).upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def chat(self) -> ChatSettings:
        return ChatSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus "<name>_error"
    entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "chat", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
