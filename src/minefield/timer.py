"""
Elapsed-time tickers.

The game does not count time itself; it hands a callback to a ticker when
play starts and cancels the ticker when play ends. The ticker decides how
often the callback fires.
"""
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

TickCallback = Callable[[], None]


# ============================================================================
# Ticker Interface
# ============================================================================

class Ticker(ABC):
    """
    Abstract periodic tick source.

    A ticker is started at most once between cancellations; starting an
    active ticker raises ``RuntimeError`` so a leaked tick is caught early.
    """

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None

    @property
    def active(self) -> bool:
        """Whether a callback is currently scheduled."""
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        """Begin calling ``callback`` once per interval."""
        if self.active:
            raise RuntimeError("Ticker already started")
        self._callback = callback
        self._schedule()

    def cancel(self) -> None:
        """Stop ticking. Cancelling an idle ticker is a no-op."""
        if not self.active:
            return
        self._callback = None
        self._unschedule()

    @abstractmethod
    def _schedule(self) -> None:
        pass

    @abstractmethod
    def _unschedule(self) -> None:
        pass


# ============================================================================
# Implementations
# ============================================================================

class ManualTicker(Ticker):
    """Ticker advanced explicitly by calling ``tick()``."""

    def _schedule(self) -> None:
        pass

    def _unschedule(self) -> None:
        pass

    def tick(self, count: int = 1) -> None:
        """Fire the callback ``count`` times; does nothing when idle."""
        for _ in range(count):
            if self._callback is None:
                return
            self._callback()


class ThreadingTicker(Ticker):
    """
    Ticker driven by a chain of daemon ``threading.Timer`` objects.

    Each start or cancel bumps a generation number; a timer from an
    earlier generation that fires late neither calls back nor reschedules.
    The callback runs on the timer thread, so the receiver must serialise
    it with its own state changes.
    """

    def __init__(self, interval: float = 1.0) -> None:
        super().__init__()
        self.interval = interval
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.RLock()

    def _schedule(self) -> None:
        with self._lock:
            self._generation += 1
            self._arm(self._generation)

    def _unschedule(self) -> None:
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _arm(self, generation: int) -> None:
        timer = threading.Timer(self.interval, self._fire, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        # The callback runs outside the lock so it may take locks of its own
        # while another thread cancels.
        with self._lock:
            callback = self._callback
            if generation != self._generation or callback is None:
                return
        callback()
        with self._lock:
            if generation == self._generation and self._callback is not None:
                self._arm(generation)
