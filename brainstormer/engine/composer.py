"""Concept composition: snapshot of the three reel values at lock time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..content.models import PLACEHOLDER_GLYPH, ConceptItem


@dataclass(frozen=True, slots=True)
class ConceptField:
    label: str
    name: str
    desc: str = ""

    def lines(self) -> List[str]:
        out = [f"{self.label}: {self.name}"]
        if self.desc:
            out.append(f"  - {self.desc}")
        return out


@dataclass(frozen=True, slots=True)
class ConceptSnapshot:
    """Display fields plus the equivalent plain text used for sharing."""
    fields: Tuple[ConceptField, ...]
    share_text: str

    def as_tuple(self) -> Tuple[Tuple[ConceptField, ...], str]:
        return self.fields, self.share_text


def _field(label: str, item: Optional[ConceptItem]) -> ConceptField:
    name = item.name if item is not None else ""
    desc = item.desc if item is not None else ""
    return ConceptField(label=label, name=name or PLACEHOLDER_GLYPH, desc=desc or "")


def compose(
    labels: Sequence[str],
    item1: Optional[ConceptItem],
    item2: Optional[ConceptItem],
    item3: Optional[ConceptItem],
) -> ConceptSnapshot:
    """Build the concept for three reel values.

    Lines are ``label: name`` followed by an indented description line when
    the item has one; empty lines are dropped.
    """
    items = (item1, item2, item3)
    fields = tuple(
        _field(labels[i] if i < len(labels) else "", item) for i, item in enumerate(items)
    )
    lines = [line for f in fields for line in f.lines() if line]
    return ConceptSnapshot(fields=fields, share_text="\n".join(lines))
