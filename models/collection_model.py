"""Collection metadata models and helpers.

Updates: v0.1.0 - 2026-10-06 - Introduce Collection dataclass and palette helper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_COLLECTION_ICON = "folder"

COLLECTION_PALETTE: tuple[str, ...] = (
    "#8B5CF6",
    "#10B981",
    "#F59E0B",
    "#3B82F6",
    "#EC4899",
    "#EF4444",
)


def collection_color(name: str) -> str:
    """Return the palette colour for *name*, keyed on its UTF-8 byte length."""

    return COLLECTION_PALETTE[len(name.encode("utf-8")) % len(COLLECTION_PALETTE)]


@dataclass(slots=True)
class Collection:
    """User-defined grouping of prompts with a derived prompt count."""

    id: int
    name: str
    icon: str = DEFAULT_COLLECTION_ICON
    color: str = COLLECTION_PALETTE[0]
    prompt_count: int = 0

    def to_record(self) -> dict[str, Any]:
        """Serialize the collection into a plain dictionary."""

        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "color": self.color,
            "prompt_count": self.prompt_count,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Collection":
        """Hydrate a Collection from a joined SQLite row."""

        count = row["prompt_count"] if "prompt_count" in row.keys() else 0
        return cls(
            id=int(row["id"]),
            name=str(row["name"]),
            icon=str(row["icon"] or DEFAULT_COLLECTION_ICON),
            color=str(row["color"] or COLLECTION_PALETTE[0]),
            prompt_count=int(count or 0),
        )


__all__ = [
    "COLLECTION_PALETTE",
    "DEFAULT_COLLECTION_ICON",
    "Collection",
    "collection_color",
]
