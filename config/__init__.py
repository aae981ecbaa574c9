"""Configuration helpers for Prompt Vault.

Updates: v0.1.0 - 2026-10-05 - Expose settings loader and configuration error types.
"""

from .settings import (
    DEFAULT_DB_FILENAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_THUMBNAIL_SIZE,
    PromptVaultSettings,
    SettingsError,
    load_settings,
)

__all__ = [
    "DEFAULT_DB_FILENAME",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_THUMBNAIL_SIZE",
    "PromptVaultSettings",
    "SettingsError",
    "load_settings",
]
