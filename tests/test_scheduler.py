"""
Sentry Tick Scheduler Test Suite

Tests for multi-rate cooperative ticking and catch-up.
Intervals are binary fractions so scheduled times add up exactly.
"""

import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sentry.simulation.scheduler import TickScheduler


class Recorder:
    """Callback that records scheduled times."""

    def __init__(self):
        self.times = []

    def __call__(self, scheduled):
        self.times.append(scheduled)


class TestRegistration:
    def test_invalid_interval(self):
        scheduler = TickScheduler()
        with pytest.raises(ValueError):
            scheduler.add("bad", 0.0, Recorder())

    def test_duplicate_name(self):
        scheduler = TickScheduler()
        scheduler.add("sweep", 0.25, Recorder())
        with pytest.raises(ValueError):
            scheduler.add("sweep", 0.5, Recorder())

    def test_invalid_catch_up(self):
        with pytest.raises(ValueError):
            TickScheduler(max_catch_up=0)

    def test_names_and_min_interval(self):
        scheduler = TickScheduler()
        assert scheduler.min_interval is None

        scheduler.add("motion", 0.5, Recorder())
        scheduler.add("sweep", 0.25, Recorder())

        assert scheduler.names == ["motion", "sweep"]
        assert scheduler.min_interval == 0.25

    def test_remove(self):
        scheduler = TickScheduler()
        scheduler.add("sweep", 0.25, Recorder())

        assert scheduler.remove("sweep")
        assert not scheduler.remove("sweep")
        assert scheduler.get("sweep") is None


class TestTicking:
    def test_not_running_until_reset(self):
        scheduler = TickScheduler()
        rec = Recorder()
        scheduler.add("sweep", 0.25, rec)

        assert scheduler.tick(10.0) == []
        assert rec.times == []

    def test_multi_rate(self):
        scheduler = TickScheduler()
        fast, slow = Recorder(), Recorder()
        scheduler.add("fast", 0.25, fast)
        scheduler.add("slow", 0.5, slow)
        scheduler.reset(now=0.0)

        for i in range(1, 9):
            scheduler.tick(i * 0.25)

        assert fast.times == [0.25 * i for i in range(1, 9)]
        assert slow.times == [0.5, 1.0, 1.5, 2.0]

    def test_callbacks_receive_scheduled_time(self):
        scheduler = TickScheduler()
        rec = Recorder()
        scheduler.add("sweep", 0.25, rec)
        scheduler.reset(now=0.0)

        assert scheduler.tick(0.6) == ["sweep", "sweep"]
        assert rec.times == [0.25, 0.5]

    def test_registration_order(self):
        scheduler = TickScheduler()
        order = []
        scheduler.add("a", 0.5, lambda t: order.append("a"))
        scheduler.add("b", 0.5, lambda t: order.append("b"))
        scheduler.reset(now=0.0)
        scheduler.tick(0.5)

        assert order == ["a", "b"]

    def test_catch_up_limit_and_reanchor(self):
        scheduler = TickScheduler(max_catch_up=3)
        rec = Recorder()
        scheduler.add("sweep", 0.25, rec)
        scheduler.reset(now=0.0)

        assert len(scheduler.tick(10.0)) == 3
        assert scheduler.get("sweep").next_due == pytest.approx(10.25)
        assert scheduler.tick(10.25) == ["sweep"]

    def test_stop(self):
        scheduler = TickScheduler()
        rec = Recorder()
        scheduler.add("sweep", 0.25, rec)
        scheduler.reset(now=0.0)
        scheduler.stop()

        assert scheduler.tick(1.0) == []
        assert not scheduler.running
        assert scheduler.names == ["sweep"]

    def test_late_registration_starts_next_tick(self):
        scheduler = TickScheduler()
        scheduler.reset(now=0.0)
        rec = Recorder()
        scheduler.add("late", 0.5, rec)

        assert scheduler.tick(1.0) == []
        assert scheduler.tick(1.5) == ["late"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
