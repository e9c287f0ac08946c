"""
Tick sources that drive property animators.

A tick source hands out timestamps (milliseconds, monotonically
non-decreasing) to callbacks that asked for exactly one tick each. Animators
re-register after every tick, so a source never needs to know who is
animating or for how long.

``ManualTickSource`` is deterministic and is what tests and headless tools
use. ``QtTickSource`` runs off a precise QTimer on the Qt event loop and
only keeps the timer alive while callbacks are waiting.
"""
import time
from typing import List, Optional, Protocol

from PySide6.QtCore import QElapsedTimer, QObject, QTimer, Qt

from core.animation.types import TickCallback
from core.logging.logger import get_logger, is_perf_metrics_enabled
from core.logging.tags import TAG_PERF, TAG_TICK

logger = get_logger(__name__)


class TickSource(Protocol):
    """What property animators need from a frame/time source."""

    def now(self) -> float:
        """Current timestamp in milliseconds."""
        ...

    def request_tick(self, callback: TickCallback) -> None:
        """Invoke ``callback(timestamp_ms)`` once, on the next tick."""
        ...


def _deliver(batch: List[TickCallback], timestamp: float) -> None:
    for callback in batch:
        try:
            callback(timestamp)
        except Exception as e:
            logger.error("%s Tick callback failed: %s", TAG_TICK, e, exc_info=True)


class ManualTickSource:
    """Tick source advanced explicitly by the caller."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)
        self._pending: List[TickCallback] = []
        self.ticks_delivered = 0

    def now(self) -> float:
        return self._now

    def request_tick(self, callback: TickCallback) -> None:
        if not callable(callback):
            raise TypeError("Tick callback must be callable")
        self._pending.append(callback)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def tick(self, timestamp_ms: Optional[float] = None) -> int:
        """
        Deliver one tick to every callback registered before this call.

        Args:
            timestamp_ms: Timestamp to deliver; defaults to the current time

        Returns:
            Number of callbacks invoked

        Raises:
            ValueError: If timestamp_ms is earlier than the current time
        """
        if timestamp_ms is not None:
            if timestamp_ms < self._now:
                raise ValueError(
                    f"Tick timestamps must not go backwards ({timestamp_ms} < {self._now})"
                )
            self._now = float(timestamp_ms)

        batch, self._pending = self._pending, []
        self.ticks_delivered += 1
        _deliver(batch, self._now)
        return len(batch)

    def advance(self, delta_ms: float) -> int:
        """Move time forward by ``delta_ms`` and deliver one tick."""
        return self.tick(self._now + delta_ms)

    def run_until_idle(self, step_ms: float = 16.0, max_ticks: int = 100000) -> int:
        """
        Keep ticking every ``step_ms`` until nothing is waiting for a tick.

        Returns:
            Number of ticks delivered
        """
        ticks = 0
        while self._pending and ticks < max_ticks:
            self.advance(step_ms)
            ticks += 1
        if self._pending:
            logger.warning("%s run_until_idle stopped after %d ticks with %d callbacks pending",
                           TAG_TICK, ticks, len(self._pending))
        return ticks


class QtTickSource(QObject):
    """
    Tick source backed by a precise QTimer.

    The timer only runs while at least one callback is pending; each timeout
    delivers a single tick to the batch that was waiting.
    """

    def __init__(self, interval_ms: int = 16, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.interval_ms = max(1, int(interval_ms))
        self._pending: List[TickCallback] = []

        self._clock = QElapsedTimer()
        self._clock.start()

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(self.interval_ms)
        self._timer.timeout.connect(self._on_timeout)

        logger.debug("QtTickSource initialized (interval=%dms)", self.interval_ms)

    def now(self) -> float:
        return self._clock.nsecsElapsed() / 1_000_000.0

    def request_tick(self, callback: TickCallback) -> None:
        if not callable(callback):
            raise TypeError("Tick callback must be callable")
        self._pending.append(callback)
        if not self._timer.isActive():
            self._timer.start()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_active(self) -> bool:
        return self._timer.isActive()

    def stop(self) -> None:
        """Stop the timer and drop every pending callback."""
        self._timer.stop()
        dropped = len(self._pending)
        self._pending = []
        if dropped:
            logger.debug("%s QtTickSource stopped with %d pending callbacks", TAG_TICK, dropped)

    def _on_timeout(self) -> None:
        batch, self._pending = self._pending, []
        if not batch:
            self._timer.stop()
            return

        timestamp = self.now()
        _start = time.perf_counter()
        _deliver(batch, timestamp)
        _elapsed = (time.perf_counter() - _start) * 1000.0
        if _elapsed > self.interval_ms and is_perf_metrics_enabled():
            logger.warning("%s Slow tick delivery: %.2fms for %d callbacks",
                           TAG_PERF, _elapsed, len(batch))

        if not self._pending:
            self._timer.stop()
