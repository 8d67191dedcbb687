"""Configuration package."""

from boodschappen.config.settings import (
    AppSettings,
    ChatSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ChatSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
