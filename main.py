"""Application entry point for Prompt Vault.

Updates:
  v0.2.0 - 2026-10-17 - Apply the configured log level once settings are loaded.
  v0.1.1 - 2026-10-13 - Print usage when no command is given.
  v0.1.0 - 2026-10-10 - Wire settings, vault bootstrap, and CLI command dispatch.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS
from cli.parser import build_parser
from cli.runtime import apply_log_level, setup_logging
from cli.settings_summary import print_settings_summary
from config import PromptVaultSettings, SettingsError, load_settings
from core import PromptVaultError, build_prompt_vault

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from core.prompt_vault import PromptVault


def _initialise_vault(
    settings: PromptVaultSettings,
    logger: logging.Logger,
) -> PromptVault | None:
    try:
        return build_prompt_vault(settings)
    except PromptVaultError as exc:
        logger.error("Failed to initialise prompt vault: %s", exc)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    parser = build_parser()
    args = parser.parse_args(argv)
    file_config_applied = setup_logging(args.logging_config)

    logger = logging.getLogger("prompt_vault.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        return 2
    if not file_config_applied:
        apply_log_level(settings.log_level)

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    command = getattr(args, "command", None)
    spec = COMMAND_SPECS.get(command) if command else None
    if spec is None:
        parser.print_help()
        return 0

    vault = None
    if spec.requires_vault:
        vault = _initialise_vault(settings, logger)
        if vault is None:
            return 3
    try:
        return spec.handler(vault, args, logger)
    finally:
        if vault is not None:
            vault.close()


if __name__ == "__main__":
    raise SystemExit(main())
