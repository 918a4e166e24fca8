import operator
import threading
from typing import Iterable, NamedTuple, Optional, Tuple

from bubble_anim.errors import InvalidIndex


class Snapshot(NamedTuple):
    """Point-in-time copy of a SortState. Safe to keep and share."""
    values: Tuple[int, ...]
    active: Optional[Tuple[int, int]]
    finished: bool

    @property
    def active_a(self) -> Optional[int]:
        return self.active[0] if self.active else None

    @property
    def active_b(self) -> Optional[int]:
        return self.active[1] if self.active else None


class SortState:
    """Values being sorted, the active pair and the finished flag.

    Every read and write goes through one lock so ``snapshot()`` from another
    thread sees the array either before or after a swap, never half of it.
    """

    def __init__(self, values: Iterable[int]):
        # copy: the caller's sequence is never aliased
        self._values = [operator.index(v) for v in values]
        self._active: Optional[Tuple[int, int]] = None
        self._finished = False
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._values)

    def __getitem__(self, index: int) -> int:
        with self._lock:
            return self._values[index]

    def __repr__(self):
        snap = self.snapshot()
        return f'SortState(values={list(snap.values)}, active={snap.active}, finished={snap.finished})'

    @property
    def finished(self) -> bool:
        return self._finished

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(tuple(self._values), self._active, self._finished)

    def _check_pair(self, a, b, distinct=True):
        n = len(self._values)
        for idx in (a, b):
            if isinstance(idx, bool) or not isinstance(idx, int):
                raise InvalidIndex(f'index must be an int, got {idx!r}')
            if not 0 <= idx < n:
                raise InvalidIndex(f'index {idx} out of range for {n} values')
        if distinct and a == b:
            raise InvalidIndex(f'active pair needs two distinct indices, got ({a}, {b})')

    def set_active(self, a: int, b: int) -> None:
        self._check_pair(a, b)
        with self._lock:
            self._active = (a, b)

    def clear_active(self) -> None:
        with self._lock:
            self._active = None

    def swap_values(self, a: int, b: int) -> None:
        self._check_pair(a, b, distinct=False)
        with self._lock:
            self._values[a], self._values[b] = self._values[b], self._values[a]

    def mark_finished(self) -> None:
        with self._lock:
            self._finished = True
