"""Runtime boot helpers for Prompt Vault CLI.

Updates:
  v0.1.1 - 2026-10-12 - Apply the configured log level after settings load.
  v0.1.0 - 2026-10-10 - Extract logging configuration helpers.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")


def setup_logging(logging_conf_path: Path | None) -> bool:
    """Configure logging using *logging_conf_path* when available.

    Returns True when a logging configuration file was applied.
    """
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return True
        except Exception:  # pragma: no cover - configuration fallback
            pass
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return False


def apply_log_level(level: str) -> None:
    """Set the root logger level from a validated level name."""
    logging.getLogger().setLevel(level)
