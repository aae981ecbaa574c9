"""SQLite-backed repository for the prompt catalogue.

Updates:
  v0.2.0 - 2026-10-12 - Share one connection behind a re-entrant lock across mixins.
  v0.1.0 - 2026-10-05 - Compose prompt, collection, and model mixins.
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

from .base import (
    RepositoryConflictError,
    RepositoryError,
    RepositoryNotFoundError,
    SCHEMA_SQL,
    connect as _connect,
    ensure_directory as _ensure_directory,
    logger,
)
from .collections import CollectionStoreMixin
from .generation_models import GenerationModelStoreMixin
from .prompts import PromptStoreMixin


class PromptVaultRepository(
    PromptStoreMixin,
    CollectionStoreMixin,
    GenerationModelStoreMixin,
):
    """Compose repository mixins over a single serialised SQLite connection."""

    def __init__(self, db_path: str | Path) -> None:
        """Open the database, ensure the schema exists, and seed reference data."""
        self._db_path = Path(db_path)
        self._lock = threading.RLock()
        _ensure_directory(self._db_path)
        try:
            self._conn = _connect(self._db_path)
        except sqlite3.Error as exc:
            raise RepositoryError(f"Unable to open database {self._db_path}") from exc
        try:
            with self._transaction() as conn:
                conn.executescript(SCHEMA_SQL)
                self._seed_models(conn)
        except sqlite3.Error as exc:
            self._conn.close()
            raise RepositoryError("Failed to initialise SQLite schema") from exc
        logger.debug("Opened prompt vault database at %s", self._db_path)

    @property
    def db_path(self) -> Path:
        """Return the database file location."""
        return self._db_path

    def close(self) -> None:
        """Close the shared connection."""
        with self._lock:
            self._conn.close()


__all__ = [
    "PromptVaultRepository",
    "RepositoryConflictError",
    "RepositoryError",
    "RepositoryNotFoundError",
]
