"""Integration tests for the SQLite prompt repository.

Updates:
  v0.2.0 - 2026-10-14 - Cover favourite listing and concurrent toggles.
  v0.1.0 - 2026-10-06 - Cover schema creation, CRUD, filters, and search.
"""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path

import pytest

from core.repository import (
    PromptVaultRepository,
    RepositoryConflictError,
    RepositoryNotFoundError,
)
from core.repository.base import connect, utc_timestamp
from models.generation_model import DEFAULT_GENERATION_MODELS
from models.prompt_model import NewPrompt, PromptUpdate


def _new_prompt(title: str = "Lighthouse", **overrides: object) -> NewPrompt:
    values: dict[str, object] = {
        "title": title,
        "prompt_text": f"{title} at dusk",
        "model": "Flux.1",
    }
    values.update(overrides)
    return NewPrompt(**values)  # type: ignore[arg-type]


def test_connect_configures_sqlite_pragmas(tmp_path: Path) -> None:
    conn = connect(tmp_path / "pragmas.db")
    try:
        foreign_keys = conn.execute("PRAGMA foreign_keys;").fetchone()[0]
        journal_mode = conn.execute("PRAGMA journal_mode;").fetchone()[0]
    finally:
        conn.close()

    assert foreign_keys == 0
    assert journal_mode.lower() == "wal"


def test_schema_creates_tables_indexes_and_seeds_models(
    repository: PromptVaultRepository,
) -> None:
    conn = sqlite3.connect(repository.db_path)
    try:
        names = {
            row[0]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type IN ('table', 'index')")
        }
    finally:
        conn.close()

    assert {"prompts", "collections", "models"} <= names
    assert {
        "idx_prompts_model",
        "idx_prompts_collection",
        "idx_prompts_favorite",
        "idx_prompts_created",
    } <= names
    models = repository.list_active_models()
    assert [model.name for model in models] == sorted(name for name, _ in DEFAULT_GENERATION_MODELS)


def test_reopening_does_not_duplicate_seed_rows(repository: PromptVaultRepository) -> None:
    reopened = PromptVaultRepository(repository.db_path)
    try:
        assert len(reopened.list_active_models()) == len(DEFAULT_GENERATION_MODELS)
    finally:
        reopened.close()


def test_inactive_models_are_hidden(repository: PromptVaultRepository) -> None:
    with repository._transaction() as conn:
        conn.execute("UPDATE models SET is_active = 0 WHERE name = 'Firefly';")

    assert "Firefly" not in {model.name for model in repository.list_active_models()}


def test_create_prompt_applies_defaults(repository: PromptVaultRepository) -> None:
    created = repository.create_prompt(_new_prompt())

    assert created.id > 0
    assert created.negative_prompt == ""
    assert created.dimensions == "1:1"
    assert created.tags == []
    assert created.is_favorite is False
    assert created.created_at == created.updated_at
    assert created.image_path is None and created.thumbnail_path is None


def test_create_prompt_requires_both_image_paths(repository: PromptVaultRepository) -> None:
    with pytest.raises(ValueError):
        repository.create_prompt(_new_prompt(), image_path="images/a.png")


def test_get_prompt_missing_raises(repository: PromptVaultRepository) -> None:
    with pytest.raises(RepositoryNotFoundError):
        repository.get_prompt(404)


def test_list_prompts_orders_newest_first_and_filters(
    repository: PromptVaultRepository,
) -> None:
    collection = repository.create_collection("Sci-fi")
    first = repository.create_prompt(_new_prompt("One", model="Gemini"))
    second = repository.create_prompt(_new_prompt("Two", collection_id=collection.id))
    third = repository.create_prompt(
        _new_prompt("Three", model="Gemini", collection_id=collection.id)
    )

    assert [p.id for p in repository.list_prompts()] == [third.id, second.id, first.id]
    assert [p.id for p in repository.list_prompts(model="Gemini")] == [third.id, first.id]
    assert [p.id for p in repository.list_prompts(collection_id=collection.id)] == [
        third.id,
        second.id,
    ]
    assert [
        p.id for p in repository.list_prompts(model="Gemini", collection_id=collection.id)
    ] == [third.id]
    assert repository.list_prompts(model="Unknown") == []


def test_update_prompt_changes_only_supplied_fields(repository: PromptVaultRepository) -> None:
    created = repository.create_prompt(
        _new_prompt(steps=20, sampler="Euler", tags=["a"], seed="42")
    )

    updated = repository.update_prompt(created.id, PromptUpdate(title="Renamed", tags=["b", "c"]))

    assert updated.title == "Renamed"
    assert updated.tags == ["b", "c"]
    assert updated.prompt_text == created.prompt_text
    assert updated.steps == 20
    assert updated.sampler == "Euler"
    assert updated.seed == "42"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_update_prompt_can_set_favorite(repository: PromptVaultRepository) -> None:
    created = repository.create_prompt(_new_prompt())

    updated = repository.update_prompt(created.id, PromptUpdate(is_favorite=True))

    assert updated.is_favorite is True


def test_update_prompt_missing_raises(repository: PromptVaultRepository) -> None:
    with pytest.raises(RepositoryNotFoundError):
        repository.update_prompt(99, PromptUpdate(title="x"))


def test_delete_prompt_returns_asset_paths(repository: PromptVaultRepository) -> None:
    created = repository.create_prompt(
        _new_prompt(),
        image_path="images/2026-10/a.png",
        thumbnail_path="thumbnails/a_thumb.png",
    )

    assert repository.delete_prompt(created.id) == (
        "images/2026-10/a.png",
        "thumbnails/a_thumb.png",
    )
    with pytest.raises(RepositoryNotFoundError):
        repository.get_prompt(created.id)


def test_delete_missing_prompt_is_a_noop(repository: PromptVaultRepository) -> None:
    assert repository.delete_prompt(12345) == (None, None)


def test_toggle_favorite_twice_restores_value(repository: PromptVaultRepository) -> None:
    created = repository.create_prompt(_new_prompt())

    assert repository.toggle_favorite(created.id) is True
    assert repository.toggle_favorite(created.id) is False
    assert repository.get_prompt(created.id).is_favorite is False


def test_toggle_favorite_missing_raises(repository: PromptVaultRepository) -> None:
    with pytest.raises(RepositoryNotFoundError):
        repository.toggle_favorite(1)


def test_concurrent_toggles_are_serialised(repository: PromptVaultRepository) -> None:
    created = repository.create_prompt(_new_prompt())
    threads = [
        threading.Thread(target=repository.toggle_favorite, args=(created.id,))
        for _ in range(10)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert repository.get_prompt(created.id).is_favorite is False


def test_search_matches_title_text_and_tags(repository: PromptVaultRepository) -> None:
    by_title = repository.create_prompt(_new_prompt("Neon City", prompt_text="streets"))
    by_text = repository.create_prompt(_new_prompt("Alley", prompt_text="neon rain"))
    by_tag = repository.create_prompt(_new_prompt("Market", prompt_text="x", tags=["NEON"]))
    repository.create_prompt(_new_prompt("Forest", prompt_text="trees"))

    ids = {prompt.id for prompt in repository.search_prompts("neon")}

    assert ids == {by_title.id, by_text.id, by_tag.id}
    assert len(repository.search_prompts("")) == 4


def test_search_wildcards_are_not_escaped(repository: PromptVaultRepository) -> None:
    repository.create_prompt(_new_prompt("Alpha"))
    repository.create_prompt(_new_prompt("Beta"))

    assert len(repository.search_prompts("%")) == 2
    assert len(repository.search_prompts("_eta")) == 1


def test_list_favorite_prompts(repository: PromptVaultRepository) -> None:
    plain = repository.create_prompt(_new_prompt("Plain"))
    liked = repository.create_prompt(_new_prompt("Liked"))
    repository.toggle_favorite(liked.id)

    favorites = repository.list_favorite_prompts()

    assert [prompt.id for prompt in favorites] == [liked.id]
    assert plain.id not in {prompt.id for prompt in favorites}


def test_collections_count_prompts_and_sort_by_name(repository: PromptVaultRepository) -> None:
    zoo = repository.create_collection("Zoo")
    art = repository.create_collection("Art")
    repository.create_prompt(_new_prompt("a", collection_id=zoo.id))
    repository.create_prompt(_new_prompt("b", collection_id=zoo.id))

    collections = repository.list_collections()

    assert [c.name for c in collections] == ["Art", "Zoo"]
    assert {c.id: c.prompt_count for c in collections} == {art.id: 0, zoo.id: 2}


def test_create_collection_assigns_icon_color_and_zero_count(
    repository: PromptVaultRepository,
) -> None:
    collection = repository.create_collection("Moods")

    assert collection.icon == "folder"
    assert collection.color == "#EF4444"
    assert collection.prompt_count == 0


def test_duplicate_collection_name_conflicts(repository: PromptVaultRepository) -> None:
    repository.create_collection("Dup")

    with pytest.raises(RepositoryConflictError):
        repository.create_collection("Dup")


def test_utc_timestamp_strictly_advances() -> None:
    future = "2999-01-01T00:00:00+00:00"

    assert utc_timestamp(after=future) == "2999-01-01T00:00:00.000001+00:00"


def test_empty_update_only_advances_timestamp(repository: PromptVaultRepository) -> None:
    created = repository.create_prompt(_new_prompt(tags=["x"], cfg_scale=6.5))

    updated = repository.update_prompt(created.id, PromptUpdate())

    before = created.to_record()
    after = updated.to_record()
    assert after.pop("updated_at") > before.pop("updated_at")
    assert after == before
