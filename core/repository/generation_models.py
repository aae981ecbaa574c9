"""Generation model reference data.

Updates:
  v0.1.0 - 2026-10-06 - Seed default models and list active entries.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

from models.generation_model import DEFAULT_GENERATION_MODELS, GenerationModel

from .base import LockedConnectionMixin, RepositoryError

if TYPE_CHECKING:
    from collections.abc import Iterable


class GenerationModelStoreMixin(LockedConnectionMixin):
    """Read-only access to the seeded model catalogue."""

    def list_active_models(self) -> list[GenerationModel]:
        """Return active model references ordered by name."""
        try:
            with self._transaction() as conn:
                rows = conn.execute(
                    "SELECT * FROM models WHERE is_active = 1 ORDER BY name;"
                ).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list models") from exc
        return [GenerationModel.from_row(row) for row in rows]

    @staticmethod
    def _seed_models(
        conn: sqlite3.Connection,
        entries: Iterable[tuple[str, str]] = DEFAULT_GENERATION_MODELS,
    ) -> None:
        conn.executemany(
            "INSERT OR IGNORE INTO models (name, short_name) VALUES (?, ?);",
            list(entries),
        )


__all__ = ["GenerationModelStoreMixin"]
