"""CLI command handlers for Prompt Vault.

Every handler routes through :class:`core.commands.CommandBridge`, so the CLI
sees exactly the records and error messages a desktop shell would.

Updates:
  v0.2.0 - 2026-10-17 - Add clipboard copy and open-image commands.
  v0.1.1 - 2026-10-13 - Print prompt listings as a table unless --json is given.
  v0.1.0 - 2026-10-10 - Initial handlers for prompts, collections, and models.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from core.commands import CommandBridge

from .utils import format_prompt_table, parse_tags, print_and_log, print_json

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core.prompt_vault import PromptVault
else:  # pragma: no cover - runtime placeholders for type-only imports
    PromptVault = object

CommandHandler = Callable[[PromptVault | None, argparse.Namespace, logging.Logger], int]

_PROMPT_FIELDS: tuple[str, ...] = (
    "title",
    "prompt_text",
    "model",
    "negative_prompt",
    "dimensions",
    "steps",
    "sampler",
    "cfg_scale",
    "seed",
    "collection_id",
)


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_vault: bool = True


def _require_vault(vault: PromptVault | None) -> PromptVault:
    if vault is None:
        raise ValueError("Prompt Vault is required for this command.")
    return vault


def _invoke(
    vault: PromptVault | None,
    logger: logging.Logger,
    command: str,
    **arguments: Any,
) -> tuple[bool, Any]:
    """Run *command* through the bridge, reporting failures on stdout."""
    response = CommandBridge(_require_vault(vault)).invoke(command, arguments)
    if not response.ok:
        print_and_log(logger, logging.ERROR, f"{command} failed: {response.error}")
        return False, None
    return True, response.data


def _prompt_payload(args: argparse.Namespace) -> dict[str, Any]:
    payload = {
        field: getattr(args, field)
        for field in _PROMPT_FIELDS
        if getattr(args, field, None) is not None
    }
    tags = parse_tags(getattr(args, "tags", None))
    if tags is not None:
        payload["tags"] = tags
    return payload


def _print_prompts(records: list[dict[str, Any]], args: argparse.Namespace) -> None:
    if getattr(args, "json", False):
        print_json(records)
    else:
        print(format_prompt_table(records))


# Prompt commands -------------------------------------------------------- #


def run_list(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    ok, records = _invoke(
        vault,
        logger,
        "get_all_prompts",
        filter=args.model,
        collection_id=args.collection_id,
    )
    if not ok:
        return 1
    _print_prompts(records, args)
    return 0


def run_show(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    ok, record = _invoke(vault, logger, "get_prompt_by_id", id=args.prompt_id)
    if not ok:
        return 1
    print_json(record)
    return 0


def run_add(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    image_arguments: dict[str, Any] = {}
    if args.image is not None:
        image_path = args.image.expanduser()
        image_arguments = {
            "image_path": str(image_path.resolve()),
            "filename": image_path.name,
            "has_image": True,
        }
    ok, record = _invoke(
        vault,
        logger,
        "create_prompt",
        prompt=_prompt_payload(args),
        **image_arguments,
    )
    if not ok:
        return 1
    logger.info("Stored prompt %s", record["id"])
    print_json(record)
    return 0


def run_update(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    payload = _prompt_payload(args)
    if args.is_favorite is not None:
        payload["is_favorite"] = args.is_favorite
    ok, record = _invoke(vault, logger, "update_prompt", id=args.prompt_id, prompt=payload)
    if not ok:
        return 1
    print_json(record)
    return 0


def run_delete(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    ok, _ = _invoke(vault, logger, "delete_prompt", id=args.prompt_id)
    if not ok:
        return 1
    print_and_log(logger, logging.INFO, f"Deleted prompt {args.prompt_id}")
    return 0


def run_toggle_favorite(
    vault: PromptVault | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    ok, is_favorite = _invoke(vault, logger, "toggle_favorite", id=args.prompt_id)
    if not ok:
        return 1
    state = "marked as favourite" if is_favorite else "removed from favourites"
    print(f"Prompt {args.prompt_id} {state}")
    return 0


def run_search(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    ok, records = _invoke(vault, logger, "search_prompts", query=args.text)
    if not ok:
        return 1
    _print_prompts(records, args)
    return 0


def run_favorites(
    vault: PromptVault | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    ok, records = _invoke(vault, logger, "get_favorite_prompts")
    if not ok:
        return 1
    _print_prompts(records, args)
    return 0


# Collections and models ------------------------------------------------- #


def run_collections(
    vault: PromptVault | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    ok, records = _invoke(vault, logger, "get_collections")
    if not ok:
        return 1
    if not records:
        print("No collections defined.")
        return 0
    for record in records:
        print(f"{record['id']:>4}  {record['name']} ({record['prompt_count']}) {record['color']}")
    return 0


def run_collection_add(
    vault: PromptVault | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    ok, record = _invoke(vault, logger, "create_collection", name=args.name)
    if not ok:
        return 1
    print_json(record)
    return 0


def run_models(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    ok, records = _invoke(vault, logger, "get_models")
    if not ok:
        return 1
    for record in records:
        print(f"{record['name']} ({record['short_name']})")
    return 0


# Desktop ---------------------------------------------------------------- #


def run_copy(vault: PromptVault | None, args: argparse.Namespace, logger: logging.Logger) -> int:
    ok, record = _invoke(vault, logger, "get_prompt_by_id", id=args.prompt_id)
    if not ok:
        return 1
    ok, _ = _invoke(vault, logger, "copy_to_clipboard", text=record["prompt_text"])
    if not ok:
        return 1
    print_and_log(logger, logging.INFO, f"Copied prompt {args.prompt_id} to the clipboard")
    return 0


def run_open_image(
    vault: PromptVault | None,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    ok, record = _invoke(vault, logger, "get_prompt_by_id", id=args.prompt_id)
    if not ok:
        return 1
    if not record.get("image_path"):
        print_and_log(logger, logging.ERROR, f"Prompt {args.prompt_id} has no image")
        return 1
    ok, _ = _invoke(vault, logger, "open_image_external", path=record["image_path"])
    return 0 if ok else 1


COMMAND_SPECS: dict[str, CommandSpec] = {
    "list": CommandSpec(run_list),
    "show": CommandSpec(run_show),
    "add": CommandSpec(run_add),
    "update": CommandSpec(run_update),
    "delete": CommandSpec(run_delete),
    "favorite": CommandSpec(run_toggle_favorite),
    "search": CommandSpec(run_search),
    "favorites": CommandSpec(run_favorites),
    "collections": CommandSpec(run_collections),
    "collection-add": CommandSpec(run_collection_add),
    "models": CommandSpec(run_models),
    "copy": CommandSpec(run_copy),
    "open-image": CommandSpec(run_open_image),
}
