"""List source loader.

Fetches a list source (http(s) URL, ``file://`` URL or local path) and decodes
it through a chain of increasingly permissive strategies:

1. strict JSON
2. JSON array literal embedded in script text
3. restricted module evaluation (``export default`` / ``module.exports``)

The result is normalized to ``list[ConceptItem]``. :meth:`SourceLoader.load`
never raises; a bad source yields ``[]`` and the caller substitutes a
placeholder so the widget stays usable.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from pathlib import Path
from typing import Any, AsyncIterator, List, Optional, Sequence
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from .errors import SourceError, SourceUnavailable, UnparseableSource
from .literal import extract_array_literal
from .models import ConceptItem
from .normalize import normalize_list
from .sandbox import evaluate_module

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0
EMPTY_SOURCE_TEXT = "[]"
_REQUEST_HEADERS = {"Cache-Control": "no-cache", "Accept": "application/json, text/javascript, */*"}


def _json_hit(value: Any) -> bool:
    """Null, false, zero and the empty string do not count as a parse."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float, str)) and not isinstance(value, bool) and not value:
        return False
    return True


def _decode(raw: bytes) -> str:
    # utf-8-sig so a leading BOM does not break JSON decoding.
    return raw.decode("utf-8-sig", errors="replace")


def parse_source_text(text: str, *, use_sandbox: bool = True) -> Any:
    """Run the parse strategy chain; raise :class:`UnparseableSource` on failure."""
    stripped = text.lstrip("\ufeff")
    try:
        value = json.loads(stripped)
    except (ValueError, RecursionError):
        value = None
    if _json_hit(value):
        logger.debug("source decoded as strict JSON")
        return value

    literal = extract_array_literal(stripped)
    if literal is not None:
        logger.debug("source decoded via array-literal extraction (%d entries)", len(literal))
        return literal

    if use_sandbox:
        exported = evaluate_module(stripped)
        if exported is not None:
            logger.debug("source decoded via module evaluation (%d entries)", len(exported))
            return exported
    raise UnparseableSource("no strategy produced a list")


def _local_path(source: str) -> Optional[Path]:
    parsed = urlparse(source)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    if parsed.scheme in ("http", "https"):
        return None
    # Windows drive letters parse as a one-letter scheme.
    if parsed.scheme and len(parsed.scheme) > 1:
        return None
    return Path(source).expanduser()


class SourceLoader:
    """Loads concept lists from remote or local sources.

    An ``httpx.AsyncClient`` may be injected (tests pass one built on
    ``httpx.MockTransport``); otherwise a client is opened per call.
    """

    def __init__(
        self,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        client: Optional[httpx.AsyncClient] = None,
        use_sandbox: bool = True,
    ) -> None:
        self.timeout_s = float(timeout_s)
        self.use_sandbox = use_sandbox
        self._client = client

    @contextlib.asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def _get(self, url: str) -> str:
        async with self._http() as client:
            response = await client.get(url, headers=_REQUEST_HEADERS, follow_redirects=True)
        if not response.is_success:
            raise SourceUnavailable(f"HTTP {response.status_code} for {url}")
        return _decode(response.content)

    async def fetch_text(self, source: Optional[str]) -> str:
        """Return the raw text of *source*.

        The timeout bounds the wait only; the transport may finish in the
        background.
        """
        if not source:
            return EMPTY_SOURCE_TEXT
        path = _local_path(source)
        try:
            if path is not None:
                raw = await asyncio.wait_for(asyncio.to_thread(path.read_bytes), self.timeout_s)
                return _decode(raw)
            return await asyncio.wait_for(self._get(source), self.timeout_s)
        except asyncio.TimeoutError as exc:
            raise SourceUnavailable(f"timeout after {self.timeout_s:g}s for {source}") from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailable(f"{type(exc).__name__} for {source}: {exc}") from exc
        except OSError as exc:
            raise SourceUnavailable(f"cannot read {source}: {exc}") from exc

    async def load(self, source: Optional[str]) -> List[ConceptItem]:
        """Fetch, decode and normalize *source*; ``[]`` on any failure."""
        try:
            text = await self.fetch_text(source)
            items = normalize_list(parse_source_text(text, use_sandbox=self.use_sandbox))
        except SourceError as exc:
            logger.warning("list source %s unusable: %s", source, exc)
            return []
        logger.info("loaded %d items from %s", len(items), source)
        return items

    async def load_all(self, sources: Sequence[Optional[str]]) -> List[List[ConceptItem]]:
        """Load every source concurrently; one result list per source."""
        return list(await asyncio.gather(*(self.load(s) for s in sources)))
