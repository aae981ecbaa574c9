"""Tests for prompt, collection, and generation model helpers.

Updates: v0.1.0 - 2026-10-12 - Cover serialisation defaults and partial update columns.
"""

from __future__ import annotations

from datetime import UTC, datetime

from models.collection_model import COLLECTION_PALETTE, Collection, collection_color
from models.generation_model import DEFAULT_GENERATION_MODELS, GenerationModel
from models.prompt_model import NewPrompt, Prompt, PromptUpdate, serialize_tags


def _row(**overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": 7,
        "title": "Sunset",
        "prompt_text": "a sunset over water",
        "negative_prompt": None,
        "model": "Flux.1",
        "image_path": None,
        "thumbnail_path": None,
        "dimensions": None,
        "steps": None,
        "sampler": None,
        "cfg_scale": None,
        "seed": None,
        "tags": '["warm", "sea"]',
        "is_favorite": 0,
        "collection_id": None,
        "created_at": "2026-01-02 03:04:05",
        "updated_at": "2026-01-02T03:04:05.123456+00:00",
    }
    row.update(overrides)
    return row


def test_prompt_from_row_applies_defaults_and_parses_timestamps() -> None:
    prompt = Prompt.from_row(_row())

    assert prompt.negative_prompt == ""
    assert prompt.dimensions == "1:1"
    assert prompt.tags == ["warm", "sea"]
    assert prompt.is_favorite is False
    assert prompt.created_at == datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
    assert prompt.updated_at.microsecond == 123456
    assert prompt.has_image is False


def test_prompt_from_row_tolerates_non_json_tags() -> None:
    assert Prompt.from_row(_row(tags="loose")).tags == ["loose"]
    assert Prompt.from_row(_row(tags=None)).tags == []


def test_prompt_to_record_is_json_friendly() -> None:
    record = Prompt.from_row(_row(is_favorite=1, steps=30, cfg_scale=7)).to_record()

    assert record["is_favorite"] is True
    assert record["steps"] == 30
    assert record["cfg_scale"] == 7.0
    assert record["tags"] == ["warm", "sea"]
    assert record["created_at"].startswith("2026-01-02T03:04:05")


def test_new_prompt_to_row_fills_column_defaults() -> None:
    row = NewPrompt(title="t", prompt_text="p", model="m").to_row()

    assert row["negative_prompt"] == ""
    assert row["dimensions"] == "1:1"
    assert row["tags"] == "[]"
    assert row["image_path"] is None


def test_serialize_tags_keeps_order_and_unicode() -> None:
    assert serialize_tags(["zeta", "ällo"]) == '["zeta", "ällo"]'


def test_prompt_update_changed_fields_skips_absent_values() -> None:
    update = PromptUpdate(title="New", tags=["a"], is_favorite=False)

    assert update.changed_fields() == {"title": "New", "tags": '["a"]', "is_favorite": 0}
    assert PromptUpdate().is_empty()


def test_collection_color_uses_utf8_length() -> None:
    assert collection_color("") == COLLECTION_PALETTE[0]
    assert collection_color("Portraits") == COLLECTION_PALETTE[9 % 6]
    # two characters, four bytes
    assert collection_color("éé") == COLLECTION_PALETTE[4]


def test_collection_from_row_without_count() -> None:
    collection = Collection.from_row(
        {"id": 1, "name": "Sci-fi", "icon": None, "color": "#10B981"}
    )

    assert collection.icon == "folder"
    assert collection.prompt_count == 0


def test_generation_model_record() -> None:
    model = GenerationModel.from_row(
        {"id": 3, "name": "Firefly", "short_name": "Adobe", "is_active": 1}
    )

    assert model.to_record() == {
        "id": 3,
        "name": "Firefly",
        "short_name": "Adobe",
        "is_active": True,
    }
    assert len(DEFAULT_GENERATION_MODELS) == 9
