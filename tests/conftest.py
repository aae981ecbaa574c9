"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-15 - Add vault, repository, and in-memory image fixtures.
  v0.1.0 - 2026-10-05 - Force Qt offscreen platform for headless test runs.
"""

from __future__ import annotations

import io
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from core.assets import AssetStore
from core.ingestion import ImageIngestor
from core.prompt_vault import PromptVault
from core.repository import PromptVaultRepository


def pytest_configure(config: Any) -> None:
    """Ensure Qt uses the offscreen platform during tests to avoid GUI aborts."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_image_bytes(
    size: tuple[int, int] = (600, 400),
    fmt: str = "PNG",
    color: str = "red",
) -> bytes:
    """Return an encoded solid-colour raster image."""
    mode = "RGB" if fmt == "JPEG" else "RGBA"
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture()
def image_bytes() -> Callable[..., bytes]:
    """Expose the raster factory to tests."""
    return make_image_bytes


@pytest.fixture()
def vault_root(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    AssetStore(root).ensure_layout()
    return root


@pytest.fixture()
def repository(vault_root: Path) -> Iterator[PromptVaultRepository]:
    repo = PromptVaultRepository(vault_root / "promptvault.db")
    try:
        yield repo
    finally:
        repo.close()


@pytest.fixture()
def assets(vault_root: Path) -> AssetStore:
    return AssetStore(vault_root)


@pytest.fixture()
def vault(
    repository: PromptVaultRepository,
    assets: AssetStore,
) -> PromptVault:
    """Return a PromptVault over a temporary asset root."""
    return PromptVault(repository, assets, ImageIngestor(assets, thumbnail_size=300))
