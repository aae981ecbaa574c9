"""Argument parser for Prompt Vault CLI.

Updates:
  v0.2.0 - 2026-10-17 - Add clipboard and external viewer commands.
  v0.1.0 - 2026-10-10 - Initial prompt, collection, and model subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence


def _add_prompt_fields(parser: argparse.ArgumentParser, *, required: bool) -> None:
    """Attach the prompt attribute options shared by ``add`` and ``update``."""
    parser.add_argument("--title", required=required, help="Prompt title.")
    parser.add_argument(
        "--prompt",
        dest="prompt_text",
        required=required,
        help="Prompt body text.",
    )
    parser.add_argument("--model", required=required, help="Generation model name.")
    parser.add_argument("--negative", dest="negative_prompt", help="Negative prompt text.")
    parser.add_argument("--dimensions", help="Aspect ratio label such as 16:9.")
    parser.add_argument("--steps", type=int, help="Sampling steps.")
    parser.add_argument("--sampler", help="Sampler name.")
    parser.add_argument("--cfg-scale", dest="cfg_scale", type=float, help="Guidance scale.")
    parser.add_argument("--seed", help="Seed value (stored as text).")
    parser.add_argument(
        "--tags",
        help="Comma-separated tags, for example 'portrait,moody'.",
    )
    parser.add_argument(
        "--collection",
        dest="collection_id",
        type=int,
        help="Collection identifier.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="Prompt Vault command line")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List prompts, newest first.")
    list_parser.add_argument("--model", default=None, help="Only prompts for this model.")
    list_parser.add_argument(
        "--collection",
        dest="collection_id",
        type=int,
        default=None,
        help="Only prompts in this collection.",
    )
    list_parser.add_argument("--json", action="store_true", help="Emit JSON records.")

    show_parser = subparsers.add_parser("show", help="Show one prompt as JSON.")
    show_parser.add_argument("prompt_id", type=int, help="Prompt identifier.")

    add_parser = subparsers.add_parser("add", help="Store a new prompt.")
    _add_prompt_fields(add_parser, required=True)
    add_parser.add_argument(
        "--image",
        type=Path,
        default=None,
        help="Image file to attach; a thumbnail is generated automatically.",
    )

    update_parser = subparsers.add_parser(
        "update",
        help="Change selected fields of a prompt; omitted options are kept.",
    )
    update_parser.add_argument("prompt_id", type=int, help="Prompt identifier.")
    _add_prompt_fields(update_parser, required=False)
    update_parser.add_argument(
        "--favorite",
        dest="is_favorite",
        action="store_true",
        default=None,
        help="Mark the prompt as a favourite.",
    )
    update_parser.add_argument(
        "--no-favorite",
        dest="is_favorite",
        action="store_false",
        help="Clear the favourite flag.",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a prompt and its images.")
    delete_parser.add_argument("prompt_id", type=int, help="Prompt identifier.")

    favorite_parser = subparsers.add_parser("favorite", help="Toggle the favourite flag.")
    favorite_parser.add_argument("prompt_id", type=int, help="Prompt identifier.")

    search_parser = subparsers.add_parser(
        "search",
        help="Find prompts whose title, text, or tags contain TEXT.",
    )
    search_parser.add_argument("text", type=str, help="Substring to look for.")
    search_parser.add_argument("--json", action="store_true", help="Emit JSON records.")

    favorites_parser = subparsers.add_parser("favorites", help="List favourite prompts.")
    favorites_parser.add_argument("--json", action="store_true", help="Emit JSON records.")

    subparsers.add_parser("collections", help="List collections with prompt counts.")

    collection_add_parser = subparsers.add_parser(
        "collection-add",
        help="Create a collection.",
    )
    collection_add_parser.add_argument("name", type=str, help="Unique collection name.")

    subparsers.add_parser("models", help="List active generation models.")

    copy_parser = subparsers.add_parser(
        "copy",
        help="Copy a prompt's text to the system clipboard.",
    )
    copy_parser.add_argument("prompt_id", type=int, help="Prompt identifier.")

    open_parser = subparsers.add_parser(
        "open-image",
        help="Open a prompt's image in the default viewer.",
    )
    open_parser.add_argument("prompt_id", type=int, help="Prompt identifier.")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the Prompt Vault launcher."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
