"""Array-literal extraction from script text.

Data files are often published as scripts (``export default [...]``,
``module.exports = [...]``, ``const LIST = [...]``) whose payload is still
valid JSON. Each heuristic below proposes a slice of the text; the first slice
that decodes as a JSON array wins.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterator, List, Optional

_EXPORT_DEFAULT_RE = re.compile(r"export\s+default\s*(?=\[)")
_MODULE_EXPORTS_RE = re.compile(r"module\.exports\s*=\s*(?=\[)")
_ASSIGN_RE = re.compile(r"=\s*(?=\[)")

_QUOTES = "\"'`"


def _matching_bracket(text: str, start: int) -> int:
    """Index of the ``]`` closing the ``[`` at *start*, or -1.

    Brackets inside string literals are skipped.
    """
    depth = 0
    quote: Optional[str] = None
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _outer_span(text: str) -> Optional[str]:
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def _balanced_from(text: str, start: int) -> Optional[str]:
    end = _matching_bracket(text, start)
    if end == -1:
        return None
    return text[start:end + 1]


def candidate_slices(text: str) -> Iterator[str]:
    """Yield candidate array-literal slices, most permissive last."""
    span = _outer_span(text)
    if span is not None:
        yield span
    for pattern in (_EXPORT_DEFAULT_RE, _MODULE_EXPORTS_RE):
        match = pattern.search(text)
        if match:
            sliced = _balanced_from(text, match.end())
            if sliced is not None:
                yield sliced
    assignments: List[re.Match] = list(_ASSIGN_RE.finditer(text))
    if assignments:
        sliced = _balanced_from(text, assignments[-1].end())
        if sliced is not None:
            yield sliced


def extract_array_literal(text: str) -> Optional[List[Any]]:
    """Return the first candidate slice that parses as a JSON array."""
    seen: set[str] = set()
    for sliced in candidate_slices(text):
        if sliced in seen:
            continue
        seen.add(sliced)
        try:
            value = json.loads(sliced)
        except (ValueError, RecursionError):
            continue
        if isinstance(value, list):
            return value
    return None
