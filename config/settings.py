"""Settings management utilities for Prompt Vault configuration.

Updates:
  v0.2.0 - 2026-10-13 - Load .env values through python-dotenv alongside the environment.
  v0.1.1 - 2026-10-09 - Validate thumbnail bounds and log level names.
  v0.1.0 - 2026-10-05 - Initial settings model with JSON and environment sources.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

ENV_PREFIX = "PROMPT_VAULT_"
DEFAULT_DB_FILENAME = "promptvault.db"
DEFAULT_THUMBNAIL_SIZE = 300
DEFAULT_LOG_LEVEL = "INFO"
_DOTENV_FALLBACK_PATH = ".env"
_DEFAULT_CONFIG_JSON = Path("config") / "config.json"

_SETTINGS_KEYS: tuple[str, ...] = (
    "data_dir",
    "db_filename",
    "thumbnail_size",
    "log_level",
)


class SettingsError(Exception):
    """Raised when Prompt Vault configuration cannot be loaded or validated."""


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv(f"{ENV_PREFIX}ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class PromptVaultSettings(BaseSettings):
    """Application configuration sourced from init kwargs, JSON, env, and ``.env``."""

    data_dir: Path | None = Field(
        default=None,
        description=(
            "Asset root holding the database, images, and thumbnails. Defaults to "
            "Documents/PromptVault, falling back to the application data folder."
        ),
    )
    db_filename: str = Field(
        default=DEFAULT_DB_FILENAME,
        description="SQLite database filename created inside the asset root.",
    )
    thumbnail_size: int = Field(
        default=DEFAULT_THUMBNAIL_SIZE,
        description="Bounding box edge, in pixels, for generated thumbnails.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Root log level applied when no logging config file is present.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": ENV_PREFIX,
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("data_dir", mode="before")
    def _normalise_data_dir(cls, value: Any) -> Path | None:
        """Expand user-relative paths; blank values select the default location."""
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        return Path(text).expanduser().resolve()

    @field_validator("db_filename")
    def _validate_db_filename(cls, value: str) -> str:
        """Ensure the database name is a bare filename."""
        text = value.strip()
        if not text or Path(text).name != text:
            raise ValueError("db_filename must be a plain filename")
        return text

    @field_validator("thumbnail_size")
    def _validate_thumbnail_size(cls, value: int) -> int:
        """Ensure the thumbnail bound is a positive integer."""
        if value <= 0:
            raise ValueError("thumbnail_size must be greater than zero")
        return value

    @field_validator("log_level", mode="before")
    def _normalise_log_level(cls, value: Any) -> str:
        """Accept case-insensitive standard logging level names."""
        text = str(value or DEFAULT_LOG_LEVEL).strip().upper()
        if not isinstance(logging.getLevelName(text), int):
            raise ValueError(f"unknown log level: {value}")
        return text

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Layer init kwargs over JSON config, then environment and ``.env``."""

        def env_with_dotenv(_: BaseSettings | None = None) -> dict[str, Any]:
            dotenv_data = {key.upper(): value for key, value in _read_dotenv_values().items()}
            data: dict[str, Any] = {}
            for field in _SETTINGS_KEYS:
                key = f"{ENV_PREFIX}{field.upper()}"
                value = os.environ.get(key)
                if value is None:
                    value = dotenv_data.get(key)
                if value is None:
                    continue
                stripped = value.strip()
                if stripped:
                    data[field] = stripped
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_dotenv),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(f"{ENV_PREFIX}CONFIG_JSON")
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = _DEFAULT_CONFIG_JSON
                if not path.exists():
                    return {}
            try:
                raw_contents = path.read_text(encoding="utf-8")
            except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                raise SettingsError(f"Unable to read configuration file: {path}") from exc
            try:
                data = json.loads(raw_contents)
            except json.JSONDecodeError as exc:
                raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
            if not isinstance(data, dict):
                raise SettingsError(f"Configuration file {path} must contain a JSON object")
            mapping_data = cast("Mapping[object, Any]", data)
            unknown = sorted(str(key) for key in mapping_data if key not in _SETTINGS_KEYS)
            if unknown:
                logger.warning(
                    "Ignoring unknown key(s) %s in configuration file %s",
                    ", ".join(unknown),
                    path,
                )
            return {key: mapping_data[key] for key in _SETTINGS_KEYS if key in mapping_data}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptVaultSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptVaultSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid Prompt Vault configuration") from exc


logger = logging.getLogger("prompt_vault.settings")
