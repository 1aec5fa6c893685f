"""List sources: fetching, decoding and normalizing concept lists."""

from .errors import SourceError, SourceUnavailable, StartupFailure, UnparseableSource
from .loader import DEFAULT_TIMEOUT_S, SourceLoader, parse_source_text
from .models import PLACEHOLDER_GLYPH, ConceptItem, ensure_items, placeholder_items
from .normalize import normalize_list

__all__ = [
    "ConceptItem",
    "DEFAULT_TIMEOUT_S",
    "PLACEHOLDER_GLYPH",
    "SourceError",
    "SourceLoader",
    "SourceUnavailable",
    "StartupFailure",
    "UnparseableSource",
    "ensure_items",
    "normalize_list",
    "parse_source_text",
    "placeholder_items",
]
