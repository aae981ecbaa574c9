"""Tests for the named command bridge and its text-only error boundary.

Updates: v0.1.0 - 2026-10-16 - Cover dispatch, payload validation, and error flattening.
"""

from __future__ import annotations

import base64
from collections.abc import Callable
from typing import Any

import pytest

from core import prompt_vault as prompt_vault_module
from core.commands import CommandBridge, CommandResponse
from core.ingestion import MISSING_IMAGE_MESSAGE
from core.prompt_vault import PromptVault


@pytest.fixture()
def bridge(vault: PromptVault) -> CommandBridge:
    return CommandBridge(vault)


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "title": "Desert",
        "prompt_text": "dunes under moonlight",
        "model": "DALL-E 3",
    }
    payload.update(overrides)
    return payload


def _ok(response: CommandResponse) -> Any:
    assert response.ok, response.error
    return response.data


def test_registered_commands(bridge: CommandBridge) -> None:
    assert set(bridge.commands) == {
        "get_all_prompts",
        "get_prompt_by_id",
        "create_prompt",
        "update_prompt",
        "delete_prompt",
        "toggle_favorite",
        "search_prompts",
        "get_favorite_prompts",
        "get_collections",
        "create_collection",
        "get_models",
        "get_image_base64",
        "copy_to_clipboard",
        "open_image_external",
    }


def test_unknown_command_returns_message(bridge: CommandBridge) -> None:
    response = bridge.invoke("drop_tables")

    assert response.to_record() == {"ok": False, "error": "Unknown command: drop_tables"}


def test_create_and_fetch_prompt_records(bridge: CommandBridge) -> None:
    created = _ok(bridge.invoke("create_prompt", {"prompt": _payload(tags=["sand", "night"])}))

    fetched = _ok(bridge.invoke("get_prompt_by_id", {"id": created["id"]}))

    assert fetched == created
    assert fetched["tags"] == ["sand", "night"]
    assert fetched["dimensions"] == "1:1"
    assert fetched["negative_prompt"] == ""


def test_create_prompt_with_integer_array_image(
    bridge: CommandBridge,
    image_bytes: Callable[..., bytes],
) -> None:
    raw = image_bytes((50, 50))
    created = _ok(
        bridge.invoke(
            "create_prompt",
            {
                "prompt": _payload(),
                "image_data": list(raw),
                "filename": "dunes.PNG",
                "has_image": True,
            },
        )
    )

    assert created["image_path"].endswith(".png")
    encoded = _ok(bridge.invoke("get_image_base64", {"path": created["image_path"]}))
    assert base64.b64decode(encoded) == raw


def test_create_prompt_flagged_image_missing_returns_message(bridge: CommandBridge) -> None:
    response = bridge.invoke("create_prompt", {"prompt": _payload(), "has_image": True})

    assert not response.ok
    assert response.error == MISSING_IMAGE_MESSAGE
    assert _ok(bridge.invoke("get_all_prompts")) == []


def test_create_prompt_missing_required_field(bridge: CommandBridge) -> None:
    payload = _payload()
    del payload["model"]

    response = bridge.invoke("create_prompt", {"prompt": payload})

    assert not response.ok
    assert "model" in (response.error or "")


def test_unexpected_argument_is_reported(bridge: CommandBridge) -> None:
    response = bridge.invoke("get_models", {"verbose": True})

    assert not response.ok
    assert (response.error or "").startswith("Invalid arguments for get_models")


def test_update_prompt_partial_and_favorite(bridge: CommandBridge) -> None:
    created = _ok(bridge.invoke("create_prompt", {"prompt": _payload(steps=30)}))

    updated = _ok(
        bridge.invoke(
            "update_prompt",
            {"id": created["id"], "prompt": {"title": "Dunes", "is_favorite": True, "seed": None}},
        )
    )

    assert updated["title"] == "Dunes"
    assert updated["steps"] == 30
    assert updated["is_favorite"] is True
    assert updated["updated_at"] > created["updated_at"]


def test_missing_prompt_errors_are_text(bridge: CommandBridge) -> None:
    assert bridge.invoke("get_prompt_by_id", {"id": 77}).error == "Prompt 77 not found"
    assert bridge.invoke("toggle_favorite", {"id": 77}).error == "Prompt 77 not found"
    assert bridge.invoke("update_prompt", {"id": 77, "prompt": {}}).error == "Prompt 77 not found"


def test_delete_prompt_twice_succeeds(bridge: CommandBridge) -> None:
    created = _ok(bridge.invoke("create_prompt", {"prompt": _payload()}))

    assert bridge.invoke("delete_prompt", {"id": created["id"]}).ok
    assert bridge.invoke("delete_prompt", {"id": created["id"]}).ok


def test_filters_search_and_favorites(bridge: CommandBridge) -> None:
    collection = _ok(bridge.invoke("create_collection", {"name": "Deserts"}))
    in_collection = _ok(
        bridge.invoke("create_prompt", {"prompt": _payload(collection_id=collection["id"])})
    )
    other = _ok(bridge.invoke("create_prompt", {"prompt": _payload(title="Jungle", model="Gemini")}))
    bridge.invoke("toggle_favorite", {"id": other["id"]})

    by_model = _ok(bridge.invoke("get_all_prompts", {"filter": "Gemini"}))
    by_collection = _ok(bridge.invoke("get_all_prompts", {"collection_id": collection["id"]}))
    found = _ok(bridge.invoke("search_prompts", {"query": "jungle"}))
    favorites = _ok(bridge.invoke("get_favorite_prompts"))

    assert [record["id"] for record in by_model] == [other["id"]]
    assert [record["id"] for record in by_collection] == [in_collection["id"]]
    assert [record["id"] for record in found] == [other["id"]]
    assert [record["id"] for record in favorites] == [other["id"]]


def test_empty_model_filter_lists_everything(bridge: CommandBridge) -> None:
    _ok(bridge.invoke("create_prompt", {"prompt": _payload()}))

    assert len(_ok(bridge.invoke("get_all_prompts", {"filter": ""}))) == 1


def test_collections_and_conflicts(bridge: CommandBridge) -> None:
    created = _ok(bridge.invoke("create_collection", {"name": "Abc"}))
    duplicate = bridge.invoke("create_collection", {"name": "Abc"})
    listed = _ok(bridge.invoke("get_collections"))

    assert created == {
        "id": created["id"],
        "name": "Abc",
        "icon": "folder",
        "color": "#3B82F6",
        "prompt_count": 0,
    }
    assert not duplicate.ok
    assert "already exists" in (duplicate.error or "")
    assert listed == [created]


def test_get_models_lists_seeded_models(bridge: CommandBridge) -> None:
    models = _ok(bridge.invoke("get_models"))

    assert {"name": "Flux Pro", "short_name": "Flux"} in [
        {"name": model["name"], "short_name": model["short_name"]} for model in models
    ]


def test_path_guard_errors_are_text(bridge: CommandBridge) -> None:
    response = bridge.invoke("get_image_base64", {"path": "../outside.png"})

    assert response.error == "invalid path: ../outside.png"


def test_unexpected_exception_is_flattened(
    bridge: CommandBridge,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def explode(text: str) -> None:
        raise RuntimeError("clipboard exploded")

    monkeypatch.setattr(prompt_vault_module, "copy_text", explode)

    response = bridge.invoke("copy_to_clipboard", {"text": "x"})

    assert response.to_record() == {"ok": False, "error": "clipboard exploded"}
