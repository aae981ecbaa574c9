"""Core service layer for Prompt Vault.

Updates:
  v0.2.0 - 2026-10-16 - Export the command bridge and desktop error types.
  v0.1.0 - 2026-10-08 - Surface PromptVault, its repository, and the build_prompt_vault factory.
"""

from .assets import AssetStore, resolve_data_dir
from .commands import CommandBridge, CommandResponse
from .exceptions import (
    AssetStorageError,
    CollectionConflictError,
    DesktopIntegrationError,
    InvalidAssetPathError,
    InvalidImageInputError,
    InvalidInputError,
    PromptNotFoundError,
    PromptStorageError,
    PromptVaultError,
)
from .factory import build_prompt_vault
from .ingestion import ImageIngestor, ImageInput, IngestedImage
from .prompt_vault import PromptVault
from .repository import (
    PromptVaultRepository,
    RepositoryConflictError,
    RepositoryError,
    RepositoryNotFoundError,
)

__all__ = [
    "AssetStorageError",
    "AssetStore",
    "CollectionConflictError",
    "CommandBridge",
    "CommandResponse",
    "DesktopIntegrationError",
    "ImageIngestor",
    "ImageInput",
    "IngestedImage",
    "InvalidAssetPathError",
    "InvalidImageInputError",
    "InvalidInputError",
    "PromptNotFoundError",
    "PromptStorageError",
    "PromptVault",
    "PromptVaultError",
    "PromptVaultRepository",
    "RepositoryConflictError",
    "RepositoryError",
    "RepositoryNotFoundError",
    "build_prompt_vault",
    "resolve_data_dir",
]
