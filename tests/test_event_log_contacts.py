"""
Sentry Event Log and Radar Contact Test Suite
"""

import logging
import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sentry.io.event_log import EventLog, EventType
from sentry.simulation.contacts import ContactKind, RadarContactGenerator, polar_to_display


# =============================================================================
# TEST 1: Event Log
# =============================================================================


class TestEventLog:
    """Bounded newest-first operator log"""

    def test_newest_first(self):
        log = EventLog()
        log.info("first", timestamp=1.0)
        log.warning("second", timestamp=2.0)

        assert [e.message for e in log.events] == ["second", "first"]
        assert log.latest().type == EventType.WARNING

    def test_bounded(self):
        log = EventLog(max_events=3)
        for i in range(5):
            log.info(f"event {i}", timestamp=float(i))

        assert len(log) == 3
        assert log.events[-1].message == "event 2"

    def test_unique_ids(self):
        log = EventLog()
        ids = {log.success("ok", timestamp=0.0).id for _ in range(10)}
        assert len(ids) == 10

    def test_clock_default(self):
        log = EventLog(clock=lambda: 42.0)
        assert log.error("boom").timestamp == 42.0

    def test_mirrored_to_logging(self, caplog):
        log = EventLog()
        with caplog.at_level(logging.INFO, logger="sentry.io.event_log"):
            log.error("sensor fault", timestamp=0.0)

        assert any(r.levelno == logging.ERROR and "sensor fault" in r.message for r in caplog.records)

    def test_to_dict(self):
        event = EventLog().info("hello", timestamp=3.0)
        assert event.to_dict() == {"id": event.id, "timestamp": 3.0, "type": "info", "message": "hello"}

    def test_clear(self):
        log = EventLog()
        log.info("x", timestamp=0.0)
        log.clear()

        assert len(log) == 0
        assert log.latest() is None


# =============================================================================
# TEST 2: Radar Contacts
# =============================================================================


class TestRadarContacts:
    """Synthetic radar returns"""

    def test_population_bounds(self):
        generator = RadarContactGenerator(min_count=3, max_count=7, rng=np.random.default_rng(1))

        for _ in range(50):
            contacts = generator.generate()
            assert 3 <= len(contacts) <= 7

    def test_contact_fields(self):
        generator = RadarContactGenerator(rng=np.random.default_rng(2))

        for contact in generator.generate():
            assert 0.0 <= contact.angle < 360.0
            assert 20.0 <= contact.distance <= 80.0
            assert 100.0 <= contact.velocity <= 800.0
            assert isinstance(contact.kind, ContactKind)
            assert len(contact.trajectory) == 5
            assert len(contact.predicted_path) == 4

    def test_ids_unique_across_generations(self):
        generator = RadarContactGenerator(rng=np.random.default_rng(3))
        first = {c.id for c in generator.generate()}
        second = {c.id for c in generator.generate()}

        assert not first & second

    def test_labels(self):
        contacts = RadarContactGenerator(min_count=3, max_count=3).generate()
        assert [c.label for c in contacts] == ["TGT-01", "TGT-02", "TGT-03"]

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            RadarContactGenerator(min_count=5, max_count=2)

    def test_polar_to_display(self):
        assert polar_to_display(0.0, 0.0) == pytest.approx((50.0, 50.0))
        # 0 deg is straight up
        x, y = polar_to_display(0.0, 22.0)
        assert x == pytest.approx(50.0)
        assert y == pytest.approx(40.0)
        x, y = polar_to_display(90.0, 22.0)
        assert x == pytest.approx(60.0)
        assert y == pytest.approx(50.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
