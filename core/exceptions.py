"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptVaultError`, allowing
callers to catch a single base class for any vault failure while still
distinguishing individual error categories when needed. The command bridge
flattens every one of them into its message text.

Updates:
  v0.2.0 - 2026-10-14 - Add desktop integration errors for clipboard and viewer access.
  v0.1.0 - 2026-10-05 - Created module with prompt, collection, and asset errors.
"""

from __future__ import annotations


class PromptVaultError(Exception):
    """Base exception for Prompt Vault failures."""


# ---------------------------------------------------------------------------
# Lookup and constraint errors
# ---------------------------------------------------------------------------


class PromptNotFoundError(PromptVaultError):
    """Raised when a prompt cannot be located in the backing store."""


class CollectionConflictError(PromptVaultError):
    """Raised when a collection name is already taken."""


# ---------------------------------------------------------------------------
# Invalid caller input
# ---------------------------------------------------------------------------


class InvalidInputError(PromptVaultError):
    """Base class for rejected caller input."""


class InvalidImageInputError(InvalidInputError):
    """Raised when an image was expected but none of the inputs yielded bytes."""


class InvalidAssetPathError(InvalidInputError):
    """Raised when a relative asset path is absolute or escapes the asset root."""


# ---------------------------------------------------------------------------
# Storage and platform failures
# ---------------------------------------------------------------------------


class PromptStorageError(PromptVaultError):
    """Raised when interactions with the SQLite store fail."""


class AssetStorageError(PromptVaultError):
    """Raised when image or thumbnail files cannot be read or written."""


class DesktopIntegrationError(PromptVaultError):
    """Raised when clipboard or external viewer access fails."""


__all__ = [
    "AssetStorageError",
    "CollectionConflictError",
    "DesktopIntegrationError",
    "InvalidAssetPathError",
    "InvalidImageInputError",
    "InvalidInputError",
    "PromptNotFoundError",
    "PromptStorageError",
    "PromptVaultError",
]
