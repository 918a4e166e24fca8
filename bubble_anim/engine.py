import enum
import math
import threading
from datetime import timedelta
from typing import Callable, Iterable, Iterator, Optional, Tuple

from bubble_anim.errors import InterruptedExecution, InvalidConfiguration
from bubble_anim.state import Snapshot, SortState
from bubble_anim.utils import get_logger

DEFAULT_ARMING_DELAY = 2.0
DEFAULT_STEP_DELAY = 0.1

log = get_logger('engine')


class EngineStatus(enum.Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    FINISHED = 'finished'
    FAILED = 'failed'
    CANCELLED = 'cancelled'


class _StopRequested(Exception):
    pass


def bubble_sort_gen(n: int) -> Iterator[Tuple[int, int]]:
    """Yield the adjacent pairs bubble sort compares, in order, for ``n`` values."""
    for i in range(n - 1):
        for j in range(0, n - i - 1):
            yield j, j + 1


def _seconds(name, delay) -> float:
    if isinstance(delay, bool):
        raise InvalidConfiguration(f'{name} must be a number of seconds or a timedelta, got {delay!r}')
    if isinstance(delay, timedelta):
        delay = delay.total_seconds()
    try:
        seconds = float(delay)
    except (TypeError, ValueError):
        raise InvalidConfiguration(f'{name} must be a number of seconds or a timedelta, got {delay!r}') from None
    if not math.isfinite(seconds) or seconds < 0 or seconds > threading.TIMEOUT_MAX:
        raise InvalidConfiguration(f'{name} must be >= 0 and at most {threading.TIMEOUT_MAX:.0f}s, got {delay!r}')
    return seconds


class AnimationEngine:
    """Runs one bubble sort on a worker thread, pausing after every step.

    ``on_change(snapshot)`` is called on the worker after each step and once
    at the end. A renderer can also poll ``snapshot()`` from any thread.
    """

    def __init__(self, sleep: Optional[Callable[[float], None]] = None):
        self._sleep = sleep
        self._thread = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._status = EngineStatus.IDLE
        self._state: Optional[SortState] = None
        self._on_change = None
        self._final: Optional[Snapshot] = None
        self.error: Optional[BaseException] = None
        self.comparisons = 0
        self.swaps = 0

    @property
    def status(self) -> EngineStatus:
        return self._status

    @property
    def state(self) -> Optional[SortState]:
        return self._state

    def snapshot(self) -> Optional[Snapshot]:
        return self._state.snapshot() if self._state is not None else None

    def is_running(self) -> bool:
        return self._status is EngineStatus.RUNNING

    def start(self, initial_values: Iterable[int], arming_delay=DEFAULT_ARMING_DELAY,
              step_delay=DEFAULT_STEP_DELAY, on_change: Callable[[Snapshot], None] = None) -> bool:
        with self._lock:
            if self._status is not EngineStatus.IDLE:
                log.info('start ignored: engine is %s', self._status.value)
                return False
            self._state = SortState(initial_values)
            arming = _seconds('arming_delay', arming_delay)
            step = _seconds('step_delay', step_delay)
            self._on_change = on_change
            self._status = EngineStatus.RUNNING
            self._stop_event.clear()
            worker = threading.Thread(target=self._run, args=(arming, step),
                                      name='bubble-sort-worker', daemon=True)
            log.info('start: n=%d arming_delay=%.3fs step_delay=%.3fs', len(self._state), arming, step)
            # published only once started, so join/stop never see an unstarted thread
            try:
                worker.start()
            except RuntimeError:
                self._status = EngineStatus.IDLE
                raise
            self._thread = worker
        return True

    def stop(self, timeout: Optional[float] = None) -> Optional[Snapshot]:
        """Ask the worker to stop between steps and wait for it."""
        if not self._thread:
            return None
        self._stop_event.set()
        self._thread.join(timeout)
        return self._final

    def join(self, timeout: Optional[float] = None) -> bool:
        if not self._thread:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _pause(self, seconds: float) -> None:
        try:
            if self._sleep is None:
                stopped = self._stop_event.wait(seconds)
            else:
                self._sleep(seconds)
                stopped = self._stop_event.is_set()
        except Exception as exc:
            raise InterruptedExecution(f'pause of {seconds:.3f}s did not complete: {exc!r}') from exc
        if stopped:
            raise _StopRequested()

    def _publish(self) -> Snapshot:
        snap = self._state.snapshot()
        if self._on_change is not None:
            self._on_change(snap)
        return snap

    def _run(self, arming: float, step: float) -> None:
        state = self._state
        try:
            self._pause(arming)
            for a, b in bubble_sort_gen(len(state)):
                state.set_active(a, b)
                self._publish()
                self._pause(step)
                self.comparisons += 1
                if state[a] > state[b]:
                    state.swap_values(a, b)
                    self.swaps += 1
                    self._publish()
                    self._pause(step)
            state.clear_active()
            state.mark_finished()
            self._finish(EngineStatus.FINISHED)
            log.info('finished: %d comparisons, %d swaps', self.comparisons, self.swaps)
        except _StopRequested:
            self._finish(EngineStatus.CANCELLED)
            log.info('cancelled after %d comparisons', self.comparisons)
        except InterruptedExecution as exc:
            self.error = exc
            log.warning('interrupted after %d comparisons: %s', self.comparisons, exc)
            self._finish(EngineStatus.FAILED)
        except Exception as exc:
            self.error = exc
            self._final = state.snapshot()
            self._status = EngineStatus.FAILED
            log.exception('worker failed')

    def _finish(self, status: EngineStatus) -> None:
        # status is set before the last notification so on_change can read it
        self._status = status
        try:
            self._final = self._publish()
        except Exception as exc:
            self._final = self._state.snapshot()
            if self.error is None:
                self.error = exc
            self._status = EngineStatus.FAILED
            log.exception('final on_change failed')
