"""
Unit tests for tick sources.
"""
import threading

import pytest
from minefield import ManualTicker, ThreadingTicker


class TestManualTicker:
    """Test the explicitly driven ticker."""

    def test_tick_calls_callback(self) -> None:
        ticker = ManualTicker()
        calls = []
        ticker.start(lambda: calls.append(1))
        ticker.tick(3)
        assert len(calls) == 3
        assert ticker.active is True

    def test_idle_tick_does_nothing(self) -> None:
        ticker = ManualTicker()
        ticker.tick()
        assert ticker.active is False

    def test_cancel_stops_ticks(self) -> None:
        ticker = ManualTicker()
        calls = []
        ticker.start(lambda: calls.append(1))
        ticker.cancel()
        ticker.cancel()
        ticker.tick(2)
        assert calls == []

    def test_double_start_raises(self) -> None:
        ticker = ManualTicker()
        ticker.start(lambda: None)
        with pytest.raises(RuntimeError, match="already started"):
            ticker.start(lambda: None)

    def test_restart_after_cancel(self) -> None:
        ticker = ManualTicker()
        ticker.start(lambda: None)
        ticker.cancel()
        calls = []
        ticker.start(lambda: calls.append(1))
        ticker.tick()
        assert calls == [1]


class TestThreadingTicker:
    """Test the timer-thread ticker."""

    def test_ticks_repeatedly_until_cancelled(self) -> None:
        ticker = ThreadingTicker(interval=0.01)
        calls = []
        done = threading.Event()

        def callback() -> None:
            calls.append(1)
            if len(calls) >= 3:
                done.set()

        ticker.start(callback)
        try:
            assert done.wait(timeout=5.0)
        finally:
            ticker.cancel()

        count = len(calls)
        assert count >= 3
        assert ticker.active is False
        done.clear()
        assert not done.wait(timeout=0.05)
        assert len(calls) == count

    def test_callback_does_not_block_cancel(self) -> None:
        ticker = ThreadingTicker(interval=0.01)
        cancelled = threading.Event()

        def callback() -> None:
            canceller = threading.Thread(target=ticker.cancel)
            canceller.start()
            canceller.join(timeout=5.0)
            if not canceller.is_alive():
                cancelled.set()

        ticker.start(callback)
        try:
            assert cancelled.wait(timeout=5.0)
        finally:
            ticker.cancel()
        assert ticker.active is False
