"""Clipboard and external viewer helpers backed by Qt.

Updates:
  v0.1.0 - 2026-10-14 - Add clipboard copy and open-with-default-application helpers.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices, QGuiApplication

from .exceptions import DesktopIntegrationError

logger = logging.getLogger("prompt_vault.desktop")

_app: QGuiApplication | None = None


def _ensure_gui_application() -> QGuiApplication:
    """Return the running Qt application, creating a minimal one when absent."""
    global _app
    instance = QGuiApplication.instance()
    if isinstance(instance, QGuiApplication):
        return instance
    if instance is not None:
        raise DesktopIntegrationError("A non-GUI Qt application is already running")
    try:
        _app = QGuiApplication([])
    except RuntimeError as exc:  # pragma: no cover - platform plugin failures
        raise DesktopIntegrationError(f"Unable to start Qt: {exc}") from exc
    return _app


def copy_text(text: str) -> None:
    """Place *text* on the system clipboard."""
    app = _ensure_gui_application()
    clipboard = app.clipboard()
    if clipboard is None:  # pragma: no cover - platform specific
        raise DesktopIntegrationError("System clipboard is unavailable")
    clipboard.setText(text)
    logger.debug("Copied %d characters to the clipboard", len(text))


def open_path(path: Path) -> None:
    """Open *path* with the platform's default application."""
    if not path.exists():
        raise DesktopIntegrationError(f"File not found: {path}")
    _ensure_gui_application()
    if not QDesktopServices.openUrl(QUrl.fromLocalFile(str(path))):
        raise DesktopIntegrationError(f"Unable to open {path} with the default application")


__all__ = ["copy_text", "open_path"]
