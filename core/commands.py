"""Request/response command bridge consumed by the presentation layer.

Each public method of :class:`CommandBridge` is a named operation taking
structured arguments and returning JSON-friendly data. :meth:`CommandBridge.invoke`
dispatches by name and flattens every failure into a human-readable message,
so nothing but text crosses the boundary on error.

Updates:
  v0.2.0 - 2026-10-16 - Validate prompt payloads with pydantic models.
  v0.1.0 - 2026-10-09 - Initial command registry mirroring the desktop shell handlers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from models.prompt_model import NewPrompt, PromptUpdate

from .exceptions import PromptVaultError
from .ingestion import ImageInput

if TYPE_CHECKING:
    from .prompt_vault import PromptVault

logger = logging.getLogger("prompt_vault.commands")


class NewPromptPayload(BaseModel):
    """Validated creation payload received from the presentation layer."""

    model_config = ConfigDict(extra="ignore")

    title: str
    prompt_text: str
    model: str
    negative_prompt: str | None = None
    dimensions: str | None = None
    steps: int | None = None
    sampler: str | None = None
    cfg_scale: float | None = None
    seed: str | None = None
    tags: list[str] | None = None
    collection_id: int | None = None

    def to_new_prompt(self) -> NewPrompt:
        return NewPrompt(**self.model_dump())


class PromptUpdatePayload(BaseModel):
    """Validated partial update; omitted or null fields are left unchanged."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    prompt_text: str | None = None
    negative_prompt: str | None = None
    model: str | None = None
    dimensions: str | None = None
    steps: int | None = None
    sampler: str | None = None
    cfg_scale: float | None = None
    seed: str | None = None
    tags: list[str] | None = None
    is_favorite: bool | None = None
    collection_id: int | None = None

    def to_update(self) -> PromptUpdate:
        return PromptUpdate(**self.model_dump())


@dataclass(slots=True, frozen=True)
class CommandResponse:
    """Outcome of a bridge invocation: data on success, message on failure."""

    ok: bool
    data: Any = None
    error: str | None = None

    def to_record(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error}


def _coerce_bytes(value: bytes | bytearray | Sequence[int] | None) -> bytes | None:
    """Accept raw bytes or the integer arrays used by IPC serialisers."""
    if value is None:
        return None
    return bytes(value)


class CommandBridge:
    """Expose vault operations by name with a string-only error boundary."""

    def __init__(self, vault: PromptVault) -> None:
        self._vault = vault
        self._handlers: dict[str, Callable[..., Any]] = {
            "get_all_prompts": self.get_all_prompts,
            "get_prompt_by_id": self.get_prompt_by_id,
            "create_prompt": self.create_prompt,
            "update_prompt": self.update_prompt,
            "delete_prompt": self.delete_prompt,
            "toggle_favorite": self.toggle_favorite,
            "search_prompts": self.search_prompts,
            "get_favorite_prompts": self.get_favorite_prompts,
            "get_collections": self.get_collections,
            "create_collection": self.create_collection,
            "get_models": self.get_models,
            "get_image_base64": self.get_image_base64,
            "copy_to_clipboard": self.copy_to_clipboard,
            "open_image_external": self.open_image_external,
        }

    @property
    def commands(self) -> tuple[str, ...]:
        """Return the registered command names."""
        return tuple(self._handlers)

    def invoke(
        self,
        command: str,
        arguments: Mapping[str, Any] | None = None,
    ) -> CommandResponse:
        """Run *command* with keyword *arguments*, converting failures to text."""
        handler = self._handlers.get(command)
        if handler is None:
            return CommandResponse(ok=False, error=f"Unknown command: {command}")
        try:
            result = handler(**dict(arguments or {}))
        except (PromptVaultError, ValidationError) as exc:
            logger.info("Command %s failed: %s", command, exc)
            return CommandResponse(ok=False, error=str(exc))
        except TypeError as exc:
            logger.info("Command %s received invalid arguments: %s", command, exc)
            return CommandResponse(ok=False, error=f"Invalid arguments for {command}: {exc}")
        except Exception as exc:  # noqa: BLE001 - boundary converts everything to text
            logger.exception("Command %s raised an unexpected error", command)
            return CommandResponse(ok=False, error=str(exc) or exc.__class__.__name__)
        return CommandResponse(ok=True, data=result)

    # Prompt commands ---------------------------------------------------- #

    def get_all_prompts(
        self,
        filter: str | None = None,
        collection_id: int | None = None,
    ) -> list[dict[str, Any]]:
        prompts = self._vault.list_prompts(model=filter or None, collection_id=collection_id)
        return [prompt.to_record() for prompt in prompts]

    def get_prompt_by_id(self, id: int) -> dict[str, Any]:
        return self._vault.get_prompt(int(id)).to_record()

    def create_prompt(
        self,
        prompt: Mapping[str, Any],
        image_data: bytes | Sequence[int] | None = None,
        filename: str | None = None,
        image_path: str | None = None,
        image_base64: str | None = None,
        has_image: bool | None = None,
    ) -> dict[str, Any]:
        payload = NewPromptPayload.model_validate(prompt)
        image = ImageInput(
            data=_coerce_bytes(image_data),
            path=image_path,
            data_url=image_base64,
            filename=filename,
            has_image=bool(has_image),
        )
        return self._vault.create_prompt(payload.to_new_prompt(), image).to_record()

    def update_prompt(self, id: int, prompt: Mapping[str, Any]) -> dict[str, Any]:
        payload = PromptUpdatePayload.model_validate(prompt)
        return self._vault.update_prompt(int(id), payload.to_update()).to_record()

    def delete_prompt(self, id: int) -> None:
        self._vault.delete_prompt(int(id))

    def toggle_favorite(self, id: int) -> bool:
        return self._vault.toggle_favorite(int(id))

    def search_prompts(self, query: str) -> list[dict[str, Any]]:
        return [prompt.to_record() for prompt in self._vault.search_prompts(query)]

    def get_favorite_prompts(self) -> list[dict[str, Any]]:
        return [prompt.to_record() for prompt in self._vault.list_favorite_prompts()]

    # Collections and models -------------------------------------------- #

    def get_collections(self) -> list[dict[str, Any]]:
        return [collection.to_record() for collection in self._vault.list_collections()]

    def create_collection(self, name: str) -> dict[str, Any]:
        return self._vault.create_collection(name).to_record()

    def get_models(self) -> list[dict[str, Any]]:
        return [model.to_record() for model in self._vault.list_models()]

    # Assets and desktop ------------------------------------------------- #

    def get_image_base64(self, path: str) -> str:
        return self._vault.read_image_base64(path)

    def copy_to_clipboard(self, text: str) -> None:
        self._vault.copy_to_clipboard(text)

    def open_image_external(self, path: str) -> None:
        self._vault.open_image_external(path)


__all__ = [
    "CommandBridge",
    "CommandResponse",
    "NewPromptPayload",
    "PromptUpdatePayload",
]
