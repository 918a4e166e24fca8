"""Bubble sort animation engine: a paced, observable bubble sort."""
from bubble_anim.errors import (
    BubbleAnimError,
    InterruptedExecution,
    InvalidConfiguration,
    InvalidIndex,
)
from bubble_anim.state import Snapshot, SortState
from bubble_anim.engine import AnimationEngine, EngineStatus, bubble_sort_gen

__all__ = [
    "AnimationEngine",
    "BubbleAnimError",
    "EngineStatus",
    "InterruptedExecution",
    "InvalidConfiguration",
    "InvalidIndex",
    "Snapshot",
    "SortState",
    "bubble_sort_gen",
]
