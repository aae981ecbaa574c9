"""Prompt Vault service façade over the repository and asset helpers.

:class:`PromptVault` is the object every handler shares. It owns the
repository (and through it the single locked connection), the asset store and
the image ingestor, and translates repository failures into the exception
taxonomy in :mod:`core.exceptions`.

Updates:
  v0.3.0 - 2026-10-16 - Remove written assets when the prompt insert fails.
  v0.2.0 - 2026-10-14 - Route clipboard and external viewer requests through desktop helpers.
  v0.1.0 - 2026-10-08 - Initial service wiring ingestion and the SQLite repository.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .desktop import copy_text, open_path
from .exceptions import (
    CollectionConflictError,
    PromptNotFoundError,
    PromptStorageError,
)
from .ingestion import ImageIngestor, ImageInput
from .repository import (
    PromptVaultRepository,
    RepositoryConflictError,
    RepositoryError,
    RepositoryNotFoundError,
)

if TYPE_CHECKING:
    from pathlib import Path

    from models.collection_model import Collection
    from models.generation_model import GenerationModel
    from models.prompt_model import NewPrompt, Prompt, PromptUpdate

    from .assets import AssetStore

logger = logging.getLogger("prompt_vault.vault")

__all__ = ["PromptVault"]


class PromptVault:
    """Coordinate prompt persistence, image ingestion, and asset cleanup."""

    def __init__(
        self,
        repository: PromptVaultRepository,
        assets: AssetStore,
        ingestor: ImageIngestor,
    ) -> None:
        self._repository = repository
        self._assets = assets
        self._ingestor = ingestor

    @property
    def repository(self) -> PromptVaultRepository:
        return self._repository

    @property
    def assets(self) -> AssetStore:
        return self._assets

    @property
    def data_dir(self) -> Path:
        """Return the asset root holding the database and image files."""
        return self._assets.root

    # Prompts ------------------------------------------------------------ #

    def list_prompts(
        self,
        model: str | None = None,
        collection_id: int | None = None,
    ) -> list[Prompt]:
        """Return prompts filtered by model and/or collection, newest first."""
        try:
            return self._repository.list_prompts(model=model, collection_id=collection_id)
        except RepositoryError as exc:
            raise PromptStorageError("Unable to list prompts") from exc

    def get_prompt(self, prompt_id: int) -> Prompt:
        try:
            return self._repository.get_prompt(prompt_id)
        except RepositoryNotFoundError as exc:
            raise PromptNotFoundError(f"Prompt {prompt_id} not found") from exc
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to load prompt {prompt_id}") from exc

    def create_prompt(
        self,
        prompt: NewPrompt,
        image: ImageInput | None = None,
    ) -> Prompt:
        """Store *prompt*, ingesting *image* first when one was supplied.

        Raises :class:`~core.exceptions.InvalidImageInputError` when an image
        was expected but could not be resolved.
        """
        ingested = self._ingestor.ingest_input(image) if image is not None else None
        try:
            created = self._repository.create_prompt(
                prompt,
                image_path=ingested.image_path if ingested else None,
                thumbnail_path=ingested.thumbnail_path if ingested else None,
            )
        except RepositoryError as exc:
            self._ingestor.discard(ingested)
            raise PromptStorageError(f"Failed to persist prompt {prompt.title!r}") from exc
        logger.info(
            "Created prompt %s (%s)%s",
            created.id,
            created.title,
            " with image" if created.has_image else "",
        )
        return created

    def update_prompt(self, prompt_id: int, update: PromptUpdate) -> Prompt:
        """Apply a partial update; absent fields keep their stored values."""
        try:
            return self._repository.update_prompt(prompt_id, update)
        except RepositoryNotFoundError as exc:
            raise PromptNotFoundError(f"Prompt {prompt_id} not found") from exc
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to update prompt {prompt_id}") from exc

    def delete_prompt(self, prompt_id: int) -> None:
        """Delete a prompt and its image files; unknown ids are ignored."""
        try:
            image_path, thumbnail_path = self._repository.delete_prompt(prompt_id)
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to delete prompt {prompt_id}") from exc
        self._assets.remove_quietly(image_path, thumbnail_path)

    def toggle_favorite(self, prompt_id: int) -> bool:
        try:
            return self._repository.toggle_favorite(prompt_id)
        except RepositoryNotFoundError as exc:
            raise PromptNotFoundError(f"Prompt {prompt_id} not found") from exc
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to toggle favourite for {prompt_id}") from exc

    def search_prompts(self, text: str) -> list[Prompt]:
        try:
            return self._repository.search_prompts(text)
        except RepositoryError as exc:
            raise PromptStorageError(f"Unable to search prompts for {text!r}") from exc

    def list_favorite_prompts(self) -> list[Prompt]:
        try:
            return self._repository.list_favorite_prompts()
        except RepositoryError as exc:
            raise PromptStorageError("Unable to list favourite prompts") from exc

    # Collections and models -------------------------------------------- #

    def list_collections(self) -> list[Collection]:
        try:
            return self._repository.list_collections()
        except RepositoryError as exc:
            raise PromptStorageError("Unable to list collections") from exc

    def create_collection(self, name: str) -> Collection:
        try:
            return self._repository.create_collection(name)
        except RepositoryConflictError as exc:
            raise CollectionConflictError(str(exc)) from exc
        except RepositoryError as exc:
            raise PromptStorageError(f"Failed to create collection {name!r}") from exc

    def list_models(self) -> list[GenerationModel]:
        try:
            return self._repository.list_active_models()
        except RepositoryError as exc:
            raise PromptStorageError("Unable to list models") from exc

    # Assets and desktop ------------------------------------------------- #

    def read_image_base64(self, relative_path: str) -> str:
        """Return a stored image as base64 text; the path must stay under the root."""
        return self._assets.read_base64(relative_path)

    def copy_to_clipboard(self, text: str) -> None:
        copy_text(text)

    def open_image_external(self, relative_path: str) -> None:
        """Open a stored image in the platform's default viewer."""
        open_path(self._assets.absolute(relative_path))

    def close(self) -> None:
        """Release the database connection."""
        self._repository.close()
