"""Shared fakes for engine and widget tests."""

from typing import List, Sequence

from brainstormer.content.models import ConceptItem
from brainstormer.engine.reel import ReelRow


class FixedRng:
    """Stand-in for ``random.Random`` that always picks the same index."""

    def __init__(self, index: int = 0):
        self.index = index

    def randrange(self, n: int) -> int:
        return self.index % n


class RecordingView:
    def __init__(self):
        self.frames: List[List[str]] = []
        self.locked_calls: List[bool] = []

    def show_rows(self, rows: Sequence[ReelRow]) -> None:
        self.frames.append([r.text for r in rows])
        assert [r.focused for r in rows] == [False, True, False]

    def set_locked(self, locked: bool) -> None:
        self.locked_calls.append(locked)

    @property
    def last(self) -> List[str]:
        return self.frames[-1]


def items(*names: str) -> List[ConceptItem]:
    return [ConceptItem(n) for n in names]
