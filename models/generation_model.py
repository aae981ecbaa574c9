"""Reference entries naming external generative models.

Updates: v0.1.0 - 2026-10-06 - Add GenerationModel dataclass and default seed list.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_GENERATION_MODELS: tuple[tuple[str, str], ...] = (
    ("Gemini", "Gemini"),
    ("Chat GPT", "GPT"),
    ("Stable Diffusion XL", "SDXL"),
    ("Midjourney V6", "MJ"),
    ("DALL-E 3", "DALL-E"),
    ("Flux Pro", "Flux"),
    ("Flux.1", "Flux.1"),
    ("Leonardo AI", "Leo"),
    ("Firefly", "Adobe"),
)


@dataclass(slots=True, frozen=True)
class GenerationModel:
    """Read-only model reference row."""

    id: int
    name: str
    short_name: str
    is_active: bool = True

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "is_active": self.is_active,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> GenerationModel:
        return cls(
            id=int(row["id"]),
            name=str(row["name"]),
            short_name=str(row["short_name"] or row["name"]),
            is_active=bool(row["is_active"]),
        )


__all__ = ["DEFAULT_GENERATION_MODELS", "GenerationModel"]
