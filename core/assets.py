"""Asset root layout, relative path guards, and file helpers.

The asset root holds the SQLite database alongside ``images/<YYYY-MM>/`` and
``thumbnails/``. Every path stored in the database is relative to the root and
uses forward slashes so it survives moving the root between platforms.

Updates:
  v0.2.0 - 2026-10-14 - Reject absolute and parent-directory paths before any file access.
  v0.1.0 - 2026-10-06 - Resolve the data directory via Qt standard locations.
"""

from __future__ import annotations

import base64
import logging
import re
from pathlib import Path, PurePosixPath, PureWindowsPath

from PySide6.QtCore import QStandardPaths

from .exceptions import AssetStorageError, InvalidAssetPathError

logger = logging.getLogger("prompt_vault.assets")

APP_DIR_NAME = "PromptVault"
IMAGES_DIR = "images"
THUMBNAILS_DIR = "thumbnails"

_SEGMENT_SPLIT = re.compile(r"[\\/]+")


def _writable_location(location: QStandardPaths.StandardLocation) -> str:
    return QStandardPaths.writableLocation(location)


def resolve_data_dir() -> Path:
    """Return the default asset root, preferring the user's documents folder."""
    documents = _writable_location(QStandardPaths.StandardLocation.DocumentsLocation)
    if documents:
        return Path(documents) / APP_DIR_NAME
    app_data = _writable_location(QStandardPaths.StandardLocation.AppDataLocation)
    if app_data:
        return Path(app_data)
    return Path.home() / ".promptvault"


def validate_relative(path: str) -> PurePosixPath:
    """Return *path* as a root-relative POSIX path or raise InvalidAssetPathError."""
    text = (path or "").strip()
    if not text:
        raise InvalidAssetPathError("invalid path: empty")
    if (
        PurePosixPath(text).is_absolute()
        or PureWindowsPath(text).is_absolute()
        or PureWindowsPath(text).drive
        or text.startswith(("/", "\\"))
    ):
        raise InvalidAssetPathError(f"invalid path: {path}")
    segments = [segment for segment in _SEGMENT_SPLIT.split(text) if segment not in ("", ".")]
    if not segments or ".." in segments:
        raise InvalidAssetPathError(f"invalid path: {path}")
    return PurePosixPath(*segments)


class AssetStore:
    """Own the asset root and every file written beneath it."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def images_dir(self) -> Path:
        return self._root / IMAGES_DIR

    @property
    def thumbnails_dir(self) -> Path:
        return self._root / THUMBNAILS_DIR

    def ensure_layout(self) -> None:
        """Create the root and its image/thumbnail directories when absent."""
        try:
            for directory in (self._root, self.images_dir, self.thumbnails_dir):
                directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AssetStorageError(f"Unable to prepare asset directory {self._root}") from exc

    def absolute(self, relative_path: str) -> Path:
        """Join a stored relative path against the root after validating it."""
        return self._root.joinpath(*validate_relative(relative_path).parts)

    def write_bytes(self, relative_path: str, data: bytes) -> Path:
        """Write *data* under the root, creating parent directories."""
        target = self.absolute(relative_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise AssetStorageError(f"Unable to write {relative_path}: {exc}") from exc
        return target

    def read_base64(self, relative_path: str) -> str:
        """Return the file contents encoded as standard base64 text."""
        target = self.absolute(relative_path)
        try:
            data = target.read_bytes()
        except OSError as exc:
            raise AssetStorageError(f"Unable to read {relative_path}: {exc}") from exc
        return base64.b64encode(data).decode("ascii")

    def remove_quietly(self, *relative_paths: str | None) -> None:
        """Delete the given files, ignoring missing files and invalid paths."""
        seen: set[str] = set()
        for relative_path in relative_paths:
            if not relative_path or relative_path in seen:
                continue
            seen.add(relative_path)
            try:
                self.absolute(relative_path).unlink()
            except (OSError, InvalidAssetPathError) as exc:
                logger.debug("Ignoring asset cleanup failure for %s: %s", relative_path, exc)


__all__ = [
    "APP_DIR_NAME",
    "AssetStore",
    "IMAGES_DIR",
    "THUMBNAILS_DIR",
    "resolve_data_dir",
    "validate_relative",
]
