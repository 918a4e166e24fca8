class BubbleAnimError(Exception):
    pass


class InvalidIndex(BubbleAnimError, IndexError):
    """A SortState mutation got an out-of-range or malformed index pair."""


class InvalidConfiguration(BubbleAnimError, ValueError):
    """Raised by AnimationEngine.start before anything is mutated."""


class InterruptedExecution(BubbleAnimError):
    """The worker's pause did not complete normally.

    Never raised out of the worker thread; it is stored on the engine
    (``engine.error``) with the original exception as ``__cause__``.
    """
