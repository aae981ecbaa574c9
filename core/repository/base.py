"""Shared repository helpers, schema, and error hierarchy.

Updates:
  v0.2.0 - 2026-10-12 - Add monotonic timestamp helper for partial updates.
  v0.1.0 - 2026-10-05 - Extract logger, schema, helpers, and exceptions.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = logging.getLogger("prompt_vault.repository")

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS prompts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    prompt_text TEXT NOT NULL,
    negative_prompt TEXT DEFAULT '',
    model TEXT NOT NULL,
    image_path TEXT,
    thumbnail_path TEXT,
    dimensions TEXT DEFAULT '1:1',
    steps INTEGER,
    sampler TEXT,
    cfg_scale REAL,
    seed TEXT,
    tags TEXT DEFAULT '[]',
    is_favorite INTEGER DEFAULT 0,
    collection_id INTEGER,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (collection_id) REFERENCES collections(id)
);

CREATE TABLE IF NOT EXISTS collections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    icon TEXT DEFAULT 'folder',
    color TEXT DEFAULT '#6b7280',
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS models (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    short_name TEXT,
    is_active INTEGER DEFAULT 1
);

CREATE INDEX IF NOT EXISTS idx_prompts_model ON prompts(model);
CREATE INDEX IF NOT EXISTS idx_prompts_collection ON prompts(collection_id);
CREATE INDEX IF NOT EXISTS idx_prompts_favorite ON prompts(is_favorite);
CREATE INDEX IF NOT EXISTS idx_prompts_created ON prompts(created_at);
"""


class RepositoryError(Exception):
    """Base exception for repository failures."""


class RepositoryNotFoundError(RepositoryError):
    """Raised when a requested record cannot be located."""


class RepositoryConflictError(RepositoryError):
    """Raised when a write violates a uniqueness constraint."""


def ensure_directory(path: Path) -> None:
    """Ensure the directory for the SQLite database exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def connect(db_path: Path) -> sqlite3.Connection:
    """Return a configured SQLite connection shared across threads.

    Callers must serialise access with the repository lock.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # The collection reference is declared but not enforced.
    conn.execute("PRAGMA foreign_keys = OFF;")
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    return conn


def utc_timestamp(after: str | None = None) -> str:
    """Return an ISO-8601 UTC timestamp strictly later than *after* when given."""
    now = datetime.now(UTC)
    if after:
        try:
            previous = datetime.fromisoformat(after.replace(" ", "T"))
        except ValueError:
            previous = None
        if previous is not None:
            if previous.tzinfo is None:
                previous = previous.replace(tzinfo=UTC)
            if now <= previous:
                now = previous + timedelta(microseconds=1)
    return now.isoformat(timespec="microseconds")


class LockedConnectionMixin:
    """Serialise every statement on the shared connection behind one lock."""

    _conn: sqlite3.Connection
    _lock: threading.RLock

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Hold the lock and commit on success, rolling back on error."""
        with self._lock, self._conn:
            yield self._conn


__all__ = [
    "LockedConnectionMixin",
    "SCHEMA_SQL",
    "RepositoryConflictError",
    "RepositoryError",
    "RepositoryNotFoundError",
    "connect",
    "ensure_directory",
    "logger",
    "utc_timestamp",
]
