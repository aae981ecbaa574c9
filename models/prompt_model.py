"""Prompt data model definitions.

Updates:
  v0.3.0 - 2026-10-12 - Add PromptUpdate partial payload with explicit changed-field helper.
  v0.2.0 - 2026-10-08 - Track generation parameters (steps, sampler, cfg scale, seed).
  v0.1.0 - 2026-10-05 - Initial Prompt schema with serialization helpers.
"""
from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from typing import Any

DEFAULT_DIMENSIONS = "1:1"


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def _ensure_datetime(value: Any) -> datetime:
    """Parse incoming datetime values (isoformat strings or datetime)."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value is None:
        return _utc_now()
    parsed = datetime.fromisoformat(str(value).replace(" ", "T"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _serialize_list(items: Iterable[Any] | None) -> list[str]:
    """Normalize iterable tag inputs into a list of strings, keeping caller order."""
    if items is None:
        return []
    if isinstance(items, str):
        return [items]
    return [str(item) for item in items]


def _deserialize_list(value: Any) -> list[str]:
    """Coerce stored tag values into lists of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        if value in ("", "null"):
            return []
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return [value]
        if isinstance(parsed, list):
            return [str(item) for item in parsed]
        return [str(parsed)]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def serialize_tags(tags: Iterable[Any] | None) -> str:
    """Return the JSON text stored in the ``tags`` column."""
    return json.dumps(_serialize_list(tags), ensure_ascii=False)


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    return float(value)


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(slots=True)
class Prompt:
    """Dataclass representation of a stored prompt."""

    id: int
    title: str
    prompt_text: str
    model: str
    negative_prompt: str = ""
    image_path: str | None = None
    thumbnail_path: str | None = None
    dimensions: str = DEFAULT_DIMENSIONS
    steps: int | None = None
    sampler: str | None = None
    cfg_scale: float | None = None
    seed: str | None = None
    tags: list[str] = field(default_factory=list)
    is_favorite: bool = False
    collection_id: int | None = None
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @property
    def has_image(self) -> bool:
        """Return True when the prompt references a stored preview image."""
        return self.image_path is not None and self.thumbnail_path is not None

    def to_record(self) -> dict[str, Any]:
        """Return a JSON-friendly dictionary for bridge and CLI consumers."""
        return {
            "id": self.id,
            "title": self.title,
            "prompt_text": self.prompt_text,
            "negative_prompt": self.negative_prompt,
            "model": self.model,
            "image_path": self.image_path,
            "thumbnail_path": self.thumbnail_path,
            "dimensions": self.dimensions,
            "steps": self.steps,
            "sampler": self.sampler,
            "cfg_scale": self.cfg_scale,
            "seed": self.seed,
            "tags": list(self.tags),
            "is_favorite": self.is_favorite,
            "collection_id": self.collection_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Prompt:
        """Create a Prompt from a SQLite row or an equivalent mapping."""
        return cls(
            id=int(row["id"]),
            title=str(row["title"]),
            prompt_text=str(row["prompt_text"]),
            model=str(row["model"]),
            negative_prompt=str(row["negative_prompt"] or ""),
            image_path=_optional_text(row["image_path"]),
            thumbnail_path=_optional_text(row["thumbnail_path"]),
            dimensions=str(row["dimensions"] or DEFAULT_DIMENSIONS),
            steps=_optional_int(row["steps"]),
            sampler=_optional_text(row["sampler"]),
            cfg_scale=_optional_float(row["cfg_scale"]),
            seed=_optional_text(row["seed"]),
            tags=_deserialize_list(row["tags"]),
            is_favorite=bool(row["is_favorite"]),
            collection_id=_optional_int(row["collection_id"]),
            created_at=_ensure_datetime(row["created_at"]),
            updated_at=_ensure_datetime(row["updated_at"]),
        )


@dataclass(slots=True)
class NewPrompt:
    """Payload describing a prompt that has not been stored yet."""

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

    def to_row(
        self,
        image_path: str | None = None,
        thumbnail_path: str | None = None,
    ) -> dict[str, Any]:
        """Return named SQL parameters for an INSERT, applying column defaults."""
        return {
            "title": self.title,
            "prompt_text": self.prompt_text,
            "negative_prompt": self.negative_prompt or "",
            "model": self.model,
            "image_path": image_path,
            "thumbnail_path": thumbnail_path,
            "dimensions": self.dimensions or DEFAULT_DIMENSIONS,
            "steps": self.steps,
            "sampler": self.sampler,
            "cfg_scale": self.cfg_scale,
            "seed": self.seed,
            "tags": serialize_tags(self.tags),
            "collection_id": self.collection_id,
        }


@dataclass(slots=True)
class PromptUpdate:
    """Partial prompt update; a ``None`` field keeps the stored value."""

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

    def changed_fields(self) -> dict[str, Any]:
        """Return column values for every field present in the update."""
        changes: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None:
                continue
            if item.name == "tags":
                value = serialize_tags(value)
            elif item.name == "is_favorite":
                value = 1 if value else 0
            changes[item.name] = value
        return changes

    def is_empty(self) -> bool:
        """Return True when no field would change."""
        return not self.changed_fields()


__all__ = [
    "DEFAULT_DIMENSIONS",
    "NewPrompt",
    "Prompt",
    "PromptUpdate",
    "serialize_tags",
]
