"""Prompt persistence, partial updates, favourites, and search helpers.

Updates:
  v0.3.0 - 2026-10-14 - Add favourite listing for the sidebar shortcut.
  v0.2.0 - 2026-10-12 - Apply partial updates field by field and bump timestamps monotonically.
  v0.1.0 - 2026-10-05 - Extract prompt CRUD helpers into mixin.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, Any, ClassVar

from models.prompt_model import NewPrompt, Prompt, PromptUpdate

from .base import (
    LockedConnectionMixin,
    RepositoryError,
    RepositoryNotFoundError,
    logger,
    utc_timestamp,
)

if TYPE_CHECKING:
    from collections.abc import Sequence


class PromptStoreMixin(LockedConnectionMixin):
    """Prompt CRUD and query helpers over the shared connection."""

    _INSERT_COLUMNS: ClassVar[Sequence[str]] = (
        "title",
        "prompt_text",
        "negative_prompt",
        "model",
        "image_path",
        "thumbnail_path",
        "dimensions",
        "steps",
        "sampler",
        "cfg_scale",
        "seed",
        "tags",
        "collection_id",
        "created_at",
        "updated_at",
    )

    # Prompt CRUD -------------------------------------------------------- #

    def list_prompts(
        self,
        model: str | None = None,
        collection_id: int | None = None,
    ) -> list[Prompt]:
        """Return prompts matching the optional filters, newest first."""
        clauses: list[str] = []
        params: list[Any] = []
        if model is not None:
            clauses.append("model = ?")
            params.append(model)
        if collection_id is not None:
            clauses.append("collection_id = ?")
            params.append(collection_id)
        where = f"WHERE {' AND '.join(clauses)} " if clauses else ""
        query = f"SELECT * FROM prompts {where}ORDER BY created_at DESC, id DESC;"
        try:
            with self._transaction() as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to fetch prompt list") from exc
        return [Prompt.from_row(row) for row in rows]

    def get_prompt(self, prompt_id: int) -> Prompt:
        """Fetch a prompt by identifier."""
        try:
            with self._transaction() as conn:
                row = self._fetch_prompt_row(conn, prompt_id)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to load prompt {prompt_id}") from exc
        return Prompt.from_row(row)

    def create_prompt(
        self,
        prompt: NewPrompt,
        image_path: str | None = None,
        thumbnail_path: str | None = None,
    ) -> Prompt:
        """Insert a new prompt and return the stored row."""
        if (image_path is None) != (thumbnail_path is None):
            raise ValueError("image_path and thumbnail_path must be provided together")
        timestamp = utc_timestamp()
        payload = prompt.to_row(image_path, thumbnail_path)
        payload["created_at"] = timestamp
        payload["updated_at"] = timestamp
        placeholders = ", ".join(f":{column}" for column in self._INSERT_COLUMNS)
        query = (
            f"INSERT INTO prompts ({', '.join(self._INSERT_COLUMNS)}) VALUES ({placeholders});"
        )
        try:
            with self._transaction() as conn:
                cursor = conn.execute(query, payload)
                prompt_id = int(cursor.lastrowid or 0)
                row = self._fetch_prompt_row(conn, prompt_id)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to insert prompt {prompt.title!r}") from exc
        logger.debug("Inserted prompt %s", prompt_id)
        return Prompt.from_row(row)

    def update_prompt(self, prompt_id: int, update: PromptUpdate) -> Prompt:
        """Overwrite the fields present in *update* and bump ``updated_at``."""
        changes = update.changed_fields()
        try:
            with self._transaction() as conn:
                existing = self._fetch_prompt_row(conn, prompt_id)
                changes["updated_at"] = utc_timestamp(after=existing["updated_at"])
                assignments = ", ".join(f"{column} = :{column}" for column in changes)
                conn.execute(
                    f"UPDATE prompts SET {assignments} WHERE id = :id;",
                    {**changes, "id": prompt_id},
                )
                row = self._fetch_prompt_row(conn, prompt_id)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to update prompt {prompt_id}") from exc
        return Prompt.from_row(row)

    def delete_prompt(self, prompt_id: int) -> tuple[str | None, str | None]:
        """Delete a prompt and return the asset paths it referenced.

        Deleting an unknown identifier is a no-op that returns ``(None, None)``.
        """
        try:
            with self._transaction() as conn:
                row = conn.execute(
                    "SELECT image_path, thumbnail_path FROM prompts WHERE id = ?;",
                    (prompt_id,),
                ).fetchone()
                conn.execute("DELETE FROM prompts WHERE id = ?;", (prompt_id,))
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete prompt {prompt_id}") from exc
        if row is None:
            logger.debug("Delete requested for missing prompt %s", prompt_id)
            return None, None
        return row["image_path"], row["thumbnail_path"]

    def toggle_favorite(self, prompt_id: int) -> bool:
        """Flip the favourite flag and return the new value."""
        try:
            with self._transaction() as conn:
                row = conn.execute(
                    "SELECT is_favorite FROM prompts WHERE id = ?;",
                    (prompt_id,),
                ).fetchone()
                if row is None:
                    raise RepositoryNotFoundError(f"Prompt {prompt_id} not found")
                new_value = not bool(row["is_favorite"])
                conn.execute(
                    "UPDATE prompts SET is_favorite = ? WHERE id = ?;",
                    (1 if new_value else 0, prompt_id),
                )
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to toggle favourite for prompt {prompt_id}") from exc
        return new_value

    # Queries ------------------------------------------------------------ #

    def search_prompts(self, text: str) -> list[Prompt]:
        """Return prompts whose title, body, or serialised tags contain *text*."""
        pattern = f"%{text}%"
        try:
            with self._transaction() as conn:
                rows = conn.execute(
                    """
                    SELECT * FROM prompts
                    WHERE title LIKE :pattern
                       OR prompt_text LIKE :pattern
                       OR tags LIKE :pattern
                    ORDER BY created_at DESC, id DESC;
                    """,
                    {"pattern": pattern},
                ).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to search prompts for {text!r}") from exc
        return [Prompt.from_row(row) for row in rows]

    def list_favorite_prompts(self) -> list[Prompt]:
        """Return favourite prompts, newest first."""
        try:
            with self._transaction() as conn:
                rows = conn.execute(
                    "SELECT * FROM prompts WHERE is_favorite = 1 "
                    "ORDER BY created_at DESC, id DESC;"
                ).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to fetch favourite prompts") from exc
        return [Prompt.from_row(row) for row in rows]

    @staticmethod
    def _fetch_prompt_row(conn: sqlite3.Connection, prompt_id: int) -> sqlite3.Row:
        row = conn.execute("SELECT * FROM prompts WHERE id = ?;", (prompt_id,)).fetchone()
        if row is None:
            raise RepositoryNotFoundError(f"Prompt {prompt_id} not found")
        return row


__all__ = ["PromptStoreMixin"]
