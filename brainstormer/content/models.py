"""Concept item model.

Items are produced once per load by the normalizer and never mutated; a reel
replaces its sequence wholesale instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

PLACEHOLDER_GLYPH = "—"


@dataclass(frozen=True, slots=True)
class ConceptItem:
    """Single reel entry.

    ``name`` is always a string (possibly empty). ``desc`` is optional extra
    detail and is only displayed when non-empty.
    """
    name: str
    desc: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "desc": self.desc}


def placeholder_items() -> List[ConceptItem]:
    """One-element stand-in for a source that produced nothing."""
    return [ConceptItem(PLACEHOLDER_GLYPH)]


def ensure_items(items: List[ConceptItem]) -> List[ConceptItem]:
    return list(items) if items else placeholder_items()
