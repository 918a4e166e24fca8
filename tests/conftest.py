"""Shared test fixtures."""
import os
import tempfile
import threading

os.environ.setdefault("MPLBACKEND", "Agg")
os.environ.setdefault("BUBBLE_ANIM_LOG_DIR", tempfile.mkdtemp(prefix="bubble_anim_logs_"))

import pytest

from bubble_anim.engine import AnimationEngine


class ChangeRecorder:
    """Collects every snapshot passed to on_change."""

    def __init__(self):
        self.snapshots = []
        self.first = threading.Event()

    def __call__(self, snapshot):
        self.snapshots.append(snapshot)
        self.first.set()

    def trace(self, initial):
        """(a, b, swapped) per step, derived from consecutive snapshots."""
        out = []
        prev = tuple(initial)
        for snap in self.snapshots:
            if snap.active is not None:
                out.append((snap.active_a, snap.active_b, snap.values != prev))
            prev = snap.values
        return out


@pytest.fixture
def recorder() -> ChangeRecorder:
    return ChangeRecorder()


@pytest.fixture
def run_sort():
    """Run a zero-delay sort to completion and return (engine, recorder)."""
    def _run(values, **kwargs):
        engine = AnimationEngine(**kwargs)
        rec = ChangeRecorder()
        assert engine.start(values, arming_delay=0, step_delay=0, on_change=rec)
        assert engine.join(timeout=10)
        return engine, rec
    return _run
