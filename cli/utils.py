"""Shared CLI utility functions for Prompt Vault commands.

Updates:
  v0.1.1 - 2026-10-13 - Add prompt table rendering and tag parsing.
  v0.1.0 - 2026-10-10 - Extract stdout logging and path helpers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Mapping, Sequence
    from logging import Logger
else:  # pragma: no cover - runtime placeholders for type-only imports
    Mapping = Sequence = Logger = Any


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def print_json(payload: object) -> None:
    """Print *payload* as indented JSON."""
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def parse_tags(value: str | None) -> list[str] | None:
    """Split a comma-separated tag option, dropping blanks; None when absent."""
    if value is None:
        return None
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def describe_path(
    path_value: object,
    *,
    expect_directory: bool,
    allow_missing_file: bool = False,
) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"

    message = f"{resolved} (missing)"
    if expect_directory or allow_missing_file:
        message = f"{resolved} (missing - created on demand)"
    parent = resolved.parent
    if not parent.exists():
        message += f", parent missing: {parent}"
    return message


def format_prompt_table(records: Sequence[Mapping[str, Any]]) -> str:
    """Return a compact fixed-width table of prompt records."""
    if not records:
        return "No prompts found."
    rows = [
        (
            str(record.get("id", "")),
            "*" if record.get("is_favorite") else "",
            str(record.get("model", "")),
            str(record.get("title", "")),
        )
        for record in records
    ]
    headers = ("ID", "FAV", "MODEL", "TITLE")
    widths = [
        max(len(headers[index]), *(len(row[index]) for row in rows))
        for index in range(len(headers) - 1)
    ]

    def _line(cells: Sequence[str]) -> str:
        padded = [cell.ljust(width) for cell, width in zip(cells, widths, strict=False)]
        return "  ".join([*padded, cells[-1]]).rstrip()

    return "\n".join([_line(headers), *(_line(row) for row in rows)])
