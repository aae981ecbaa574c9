"""Factories for constructing PromptVault instances from validated settings.

Updates:
  v0.2.0 - 2026-10-16 - Close the repository when asset layout preparation fails.
  v0.1.0 - 2026-10-08 - Initial builder wiring assets, repository, and ingestion.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .assets import AssetStore, resolve_data_dir
from .exceptions import AssetStorageError, PromptStorageError
from .ingestion import ImageIngestor
from .prompt_vault import PromptVault
from .repository import PromptVaultRepository, RepositoryError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from pathlib import Path

    from config import PromptVaultSettings

factory_logger = logging.getLogger("prompt_vault.factory")


def resolve_vault_root(settings: PromptVaultSettings) -> Path:
    """Return the configured asset root, falling back to the platform default."""
    if settings.data_dir is not None:
        return settings.data_dir
    return resolve_data_dir()


def build_prompt_vault(
    settings: PromptVaultSettings,
    *,
    repository: PromptVaultRepository | None = None,
) -> PromptVault:
    """Return a PromptVault configured from validated settings.

    The asset root and its ``images``/``thumbnails`` directories are created
    before the database so a fresh install is usable after one call.
    """
    root = resolve_vault_root(settings)
    assets = AssetStore(root)
    try:
        assets.ensure_layout()
    except AssetStorageError:
        if repository is not None:
            repository.close()
        raise

    if repository is None:
        db_path = root / settings.db_filename
        try:
            repository = PromptVaultRepository(db_path)
        except RepositoryError as exc:
            raise PromptStorageError(f"Unable to open prompt database at {db_path}") from exc

    ingestor = ImageIngestor(assets, thumbnail_size=settings.thumbnail_size)
    factory_logger.debug(
        "Prompt vault ready: root=%s database=%s thumbnail_size=%s",
        root,
        repository.db_path,
        settings.thumbnail_size,
    )
    return PromptVault(repository, assets, ingestor)


__all__ = ["build_prompt_vault", "resolve_vault_root"]
