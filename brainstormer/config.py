"""Widget configuration: reel labels, list sources and spin speeds.

Values resolve per field in this order: explicit override (CLI flag) >
``BRAINSTORMER_*`` environment variable > built-in default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .content.loader import DEFAULT_TIMEOUT_S

logger = logging.getLogger(__name__)

REEL_COUNT = 3
DEFAULT_COMMIT = "d38fd6ee3b954986a28eca30598b3655595bc915"
DEFAULT_REPO = "Drewg38/LucidBrainstormers"
DEFAULT_LABELS: Tuple[str, ...] = ("Activities", "Locations", "Thoughts")
DEFAULT_SPEEDS: Dict[str, float] = {"slow": 0.9, "spin": 1.4, "fast": 2.2}

ENV_LABEL = "BRAINSTORMER_L{n}"
ENV_SOURCE = "BRAINSTORMER_SRC{n}"
ENV_TIMEOUT = "BRAINSTORMER_FETCH_TIMEOUT"


def raw_github_url(path: str, commit: str = DEFAULT_COMMIT, repo: str = DEFAULT_REPO) -> str:
    return f"https://raw.githubusercontent.com/{repo}/{commit}/{path}"


DEFAULT_SOURCES: Tuple[str, ...] = (
    raw_github_url("artist_excursion_activities.js"),
    raw_github_url("artist_excursion_locations.js"),
    raw_github_url("artist_excursion_thoughts.js"),
)


@dataclass
class BrainstormerConfig:
    labels: Tuple[str, ...] = DEFAULT_LABELS
    sources: Tuple[str, ...] = DEFAULT_SOURCES
    speeds: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_SPEEDS))
    fetch_timeout_s: float = DEFAULT_TIMEOUT_S

    def __post_init__(self) -> None:
        if len(self.labels) != REEL_COUNT or len(self.sources) != REEL_COUNT:
            raise ValueError(f"expected {REEL_COUNT} labels and sources")
        self.labels = tuple(self.labels)
        self.sources = tuple(self.sources)

    def speed(self, name: str) -> float:
        return self.speeds.get(name, 1.0)

    @classmethod
    def resolve(
        cls,
        *,
        labels: Optional[Sequence[Optional[str]]] = None,
        sources: Optional[Sequence[Optional[str]]] = None,
        timeout_s: Optional[float] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> "BrainstormerConfig":
        """Merge overrides, environment and defaults into a config."""
        env = os.environ if env is None else env
        labels = list(labels or [])
        sources = list(sources or [])

        def pick(overrides: list, idx: int, env_key: str, default: str) -> str:
            if idx < len(overrides) and overrides[idx]:
                return str(overrides[idx])
            from_env = env.get(env_key.format(n=idx + 1))
            return from_env if from_env else default

        resolved_labels = tuple(
            pick(labels, i, ENV_LABEL, DEFAULT_LABELS[i]) for i in range(REEL_COUNT)
        )
        resolved_sources = tuple(
            pick(sources, i, ENV_SOURCE, DEFAULT_SOURCES[i]) for i in range(REEL_COUNT)
        )
        return cls(
            labels=resolved_labels,
            sources=resolved_sources,
            fetch_timeout_s=timeout_s if timeout_s is not None else _env_timeout(env),
        )


def _env_timeout(env: Mapping[str, str]) -> float:
    raw = env.get(ENV_TIMEOUT)
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        value = float(raw)
    except ValueError:
        value = -1.0
    if value <= 0:
        logger.warning("ignoring invalid %s=%r; using %.0fs", ENV_TIMEOUT, raw, DEFAULT_TIMEOUT_S)
        return DEFAULT_TIMEOUT_S
    return value
