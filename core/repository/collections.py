"""Collection persistence helpers.

Updates:
  v0.1.0 - 2026-10-06 - Add collection listing with live prompt counts and creation.
"""

from __future__ import annotations

import sqlite3

from models.collection_model import DEFAULT_COLLECTION_ICON, Collection, collection_color

from .base import (
    LockedConnectionMixin,
    RepositoryConflictError,
    RepositoryError,
    logger,
    utc_timestamp,
)


class CollectionStoreMixin(LockedConnectionMixin):
    """Collection CRUD helpers."""

    def list_collections(self) -> list[Collection]:
        """Return collections alphabetically with their current prompt counts."""
        try:
            with self._transaction() as conn:
                rows = conn.execute(
                    """
                    SELECT c.id, c.name, c.icon, c.color, COUNT(p.id) AS prompt_count
                    FROM collections c
                    LEFT JOIN prompts p ON c.id = p.collection_id
                    GROUP BY c.id
                    ORDER BY c.name;
                    """
                ).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list collections") from exc
        return [Collection.from_row(row) for row in rows]

    def create_collection(self, name: str) -> Collection:
        """Insert a collection coloured from the palette by name length."""
        color = collection_color(name)
        try:
            with self._transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO collections (name, icon, color, created_at) VALUES (?, ?, ?, ?);",
                    (name, DEFAULT_COLLECTION_ICON, color, utc_timestamp()),
                )
                collection_id = int(cursor.lastrowid or 0)
        except sqlite3.IntegrityError as exc:
            raise RepositoryConflictError(f"Collection {name!r} already exists") from exc
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to create collection {name!r}") from exc
        logger.debug("Created collection %s (%s)", collection_id, name)
        return Collection(
            id=collection_id,
            name=name,
            icon=DEFAULT_COLLECTION_ICON,
            color=color,
            prompt_count=0,
        )


__all__ = ["CollectionStoreMixin"]
