"""Shape coercion for raw list data.

Whatever the parse strategies recover (a list, an object with ``items`` or
anything else) is turned into ``list[ConceptItem]``. Field lookup follows
null-coalescing semantics: a key counts as present when it exists and is not
``None``.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Sequence

from .models import ConceptItem

NAME_FIELDS: tuple[str, ...] = ("name", "label", "value")
DESC_FIELDS: tuple[str, ...] = ("desc", "description", "details", "detail", "text")


def _first_present(obj: dict, keys: Sequence[str]) -> Optional[Any]:
    for key in keys:
        value = obj.get(key)
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (bool, dict, list)):
        # Keep the source spelling (true/false, JSON objects) rather than repr().
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def item_name(raw: Any) -> str:
    if isinstance(raw, dict):
        found = _first_present(raw, NAME_FIELDS)
        if found is not None:
            return _as_text(found)
    if isinstance(raw, str):
        return raw
    return _as_text(raw)


def item_desc(raw: Any) -> str:
    if not isinstance(raw, dict):
        return ""
    return _as_text(_first_present(raw, DESC_FIELDS))


def normalize_item(raw: Any) -> ConceptItem:
    return ConceptItem(name=item_name(raw), desc=item_desc(raw))


def normalize_list(raw: Any) -> List[ConceptItem]:
    """Coerce a parsed value into concept items (``[]`` for anything else)."""
    if isinstance(raw, list):
        return [normalize_item(x) for x in raw]
    if isinstance(raw, dict) and isinstance(raw.get("items"), list):
        return [normalize_item(x) for x in raw["items"]]
    return []
