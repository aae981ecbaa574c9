"""Printable summaries for Prompt Vault configuration.

Updates:
  v0.1.1 - 2026-10-13 - Show the resolved default asset root when none is configured.
  v0.1.0 - 2026-10-10 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from config import PromptVaultSettings
from core.assets import IMAGES_DIR, THUMBNAILS_DIR
from core.factory import resolve_vault_root

from .utils import describe_path


def print_settings_summary(settings: PromptVaultSettings) -> None:
    """Emit a readable summary of storage configuration and health checks."""
    root = resolve_vault_root(settings)
    root_source = "configured" if settings.data_dir is not None else "default"
    lines = [
        "Prompt Vault configuration summary",
        "----------------------------------",
        f"Asset root ({root_source}): {describe_path(root, expect_directory=True)}",
        "Database path: "
        + describe_path(
            root / settings.db_filename,
            expect_directory=False,
            allow_missing_file=True,
        ),
        f"Images directory: {describe_path(root / IMAGES_DIR, expect_directory=True)}",
        f"Thumbnails directory: {describe_path(root / THUMBNAILS_DIR, expect_directory=True)}",
        f"Thumbnail size (px): {settings.thumbnail_size}",
        f"Log level: {settings.log_level}",
    ]
    print("\n".join(lines))
