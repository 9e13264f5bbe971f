"""
Sentry Threat Registry Test Suite

Tests for threat spawning, velocity-proportional progress, wrap-around waves,
neutralization and the derived distance/ETA fields.
"""

import os
import sys

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sentry.geo.constants import DEFAULT_DEFENDED_LAT, DEFAULT_DEFENDED_LNG, ETA_SENTINEL_S
from sentry.geo.trajectory import haversine_distance_km
from sentry.simulation.alerts import ALERT_TONES_HZ, ProximityMonitor
from sentry.simulation.catalogue import DEFAULT_CATALOGUE
from sentry.simulation.objects import Threat, ThreatKind, ThreatLevel, ThreatOrigin
from sentry.simulation.registry import ThreatRegistry

MOSCOW = ThreatOrigin(
    id="atk-1",
    lat=55.7558,
    lng=37.6173,
    name="Moscow",
    country="RUSSIA",
    kind=ThreatKind.MISSILE,
    level=ThreatLevel.CRITICAL,
    velocity_kmh=5500.0,
    altitude_m=35000.0,
)


@pytest.fixture
def registry():
    """Registry with the default catalogue spawned"""
    reg = ThreatRegistry(rng=np.random.default_rng(3))
    reg.spawn(DEFAULT_CATALOGUE)
    return reg


# =============================================================================
# TEST 1: Spawn
# =============================================================================


class TestSpawn:
    """Catalogue instantiation"""

    def test_one_threat_per_origin(self, registry):
        assert len(registry) == 8
        assert [t.id for t in registry.snapshot()] == [o.id for o in DEFAULT_CATALOGUE]

    def test_initial_progress_in_range(self, registry):
        for threat in registry.snapshot():
            assert 0.1 <= threat.progress <= 0.4
            assert not threat.neutralized

    def test_starts_not_synchronised(self, registry):
        progresses = {round(t.progress, 6) for t in registry.snapshot()}
        assert len(progresses) > 1

    def test_respawn_replaces_population(self, registry):
        registry.neutralize("atk-1")
        registry.spawn(DEFAULT_CATALOGUE)

        assert len(registry) == 8
        assert not registry.get("atk-1").neutralized

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            ThreatRegistry(wrap_progress=1.0)
        with pytest.raises(ValueError):
            ThreatRegistry(progress_range=(0.5, 0.2))


# =============================================================================
# TEST 2: Derived Fields
# =============================================================================


class TestDerivedFields:
    """distance = total * (1 - progress), eta = distance / (v / 3600)"""

    def test_moscow_scenario(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW, progress=0.5)
        threat = registry.get("atk-1")

        total = haversine_distance_km(
            MOSCOW.lat, MOSCOW.lng, DEFAULT_DEFENDED_LAT, DEFAULT_DEFENDED_LNG
        )
        assert registry.total_distance_km("atk-1") == pytest.approx(total)
        assert threat.distance_km == pytest.approx(total / 2, abs=1e-6)
        assert threat.eta_seconds == pytest.approx(threat.distance_km / (5500.0 / 3600.0))

    def test_derived_fields_follow_progress(self, registry):
        for _ in range(25):
            registry.tick()
        for threat in registry.snapshot():
            total = registry.total_distance_km(threat.id)
            assert threat.distance_km == pytest.approx(total * (1 - threat.progress))

    def test_stationary_threat_sentinel(self):
        registry = ThreatRegistry()
        origin = ThreatOrigin(
            "static", 0.0, 0.0, "Test", "TEST", ThreatKind.CYBER, ThreatLevel.LOW, 0.0, 0.0
        )
        registry.add(origin, progress=0.2)

        assert registry.get("static").eta_seconds == ETA_SENTINEL_S

    def test_set_progress(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW, progress=0.1)

        assert registry.set_progress("atk-1", 1.0)
        assert registry.get("atk-1").distance_km == pytest.approx(0.0)
        assert not registry.set_progress("missing", 0.5)

    def test_relocate_recomputes(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW, progress=0.0)
        registry.relocate(MOSCOW.lat, MOSCOW.lng)

        assert registry.get("atk-1").distance_km == pytest.approx(0.0)
        assert registry.get("atk-1").eta_seconds == pytest.approx(0.0)


# =============================================================================
# TEST 3: Tick and Wrap
# =============================================================================


class TestTick:
    """Velocity-proportional progress and wave wrap"""

    def test_increment_is_velocity_proportional(self):
        registry = ThreatRegistry()
        assert registry.progress_increment(5500.0) == pytest.approx(0.003 + 0.055)
        assert registry.progress_increment(180.0) == pytest.approx(0.003 + 0.0018)

    def test_tick_advances(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW, progress=0.2)
        registry.tick()

        assert registry.get("atk-1").progress == pytest.approx(0.2 + 0.058)

    def test_progress_wraps_to_epsilon(self):
        registry = ThreatRegistry(wrap_progress=0.05)
        registry.add(MOSCOW, progress=0.95)

        wrapped = registry.tick()
        threat = registry.get("atk-1")

        assert wrapped == ["atk-1"]
        assert threat.progress == pytest.approx(0.05)
        assert threat.distance_km == pytest.approx(registry.total_distance_km("atk-1") * 0.95)
        assert registry.waves == 1

    def test_progress_never_exceeds_one(self, registry):
        for _ in range(500):
            registry.tick()
            for threat in registry.snapshot():
                assert 0.0 <= threat.progress <= 1.0
        assert registry.waves > 0

    def test_neutralized_threat_frozen(self, registry):
        registry.neutralize("atk-2")
        before = registry.get("atk-2").progress

        for _ in range(10):
            registry.tick()

        assert registry.get("atk-2").progress == before

    def test_negative_velocity_floors_at_zero(self):
        """A receding platform stops at its origin instead of going past it"""
        registry = ThreatRegistry()
        receding = ThreatOrigin(
            id="atk-9",
            lat=55.7558,
            lng=37.6173,
            name="Moscow",
            country="RUSSIA",
            kind=ThreatKind.AIRCRAFT,
            level=ThreatLevel.LOW,
            velocity_kmh=-1000.0,
            altitude_m=9000.0,
        )
        registry.add(receding, progress=0.1)

        for _ in range(50):
            registry.tick()
            threat = registry.get("atk-9")
            assert 0.0 <= threat.progress <= 1.0
            assert threat.distance_km <= registry.total_distance_km("atk-9") + 1e-9

        assert threat.progress == 0.0
        assert threat.eta_seconds == ETA_SENTINEL_S


# =============================================================================
# TEST 4: Neutralization and Queries
# =============================================================================


class TestNeutralize:
    """Terminal state, counts and arcs"""

    def test_neutralize(self, registry):
        assert registry.neutralize("atk-1")
        assert registry.get("atk-1").neutralized
        assert not registry.get("atk-1").active

    def test_neutralize_twice_is_noop(self, registry):
        registry.neutralize("atk-1")
        assert not registry.neutralize("atk-1")

    def test_unknown_id_is_noop(self, registry):
        assert not registry.neutralize("atk-99")
        assert "atk-99" not in registry

    def test_counts_exclude_neutralized(self, registry):
        assert registry.counts() == {"critical": 2, "high": 3, "medium": 2, "low": 1}

        registry.neutralize("atk-1")
        assert registry.counts()["critical"] == 1

    def test_arc_hidden_when_neutralized(self, registry):
        assert registry.arc("atk-3") is not None
        registry.neutralize("atk-3")

        assert registry.arc("atk-3") is None
        assert registry.prediction("atk-3") is None
        assert "atk-3" not in [c.id for c in registry.sweep_entities()]

    def test_arc_tracks_progress(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW, progress=0.5)

        assert len(registry.arc("atk-1")) == 31
        assert len(registry.prediction("atk-1")) == 31

    def test_snapshot_is_a_copy(self, registry):
        threat = registry.snapshot()[0]
        threat.progress = 0.99

        assert registry.get(threat.id).progress != 0.99

    def test_bearing_from_defended_position(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW)

        bearing = registry.bearing("atk-1")
        assert min(bearing, 360.0 - bearing) < 5.0
        assert registry.bearing("missing") is None

    def test_to_dict(self, registry):
        data = registry.get("atk-1").to_dict()
        assert data["kind"] == "missile"
        assert data["level"] == "critical"
        assert isinstance(Threat.from_origin(MOSCOW, 0.3), Threat)


# =============================================================================
# TEST 5: Proximity Alerts
# =============================================================================


class TestProximityAlerts:
    """Distance thresholds with a shared cooldown"""

    @pytest.fixture
    def close_registry(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW, progress=0.95)
        return registry

    def test_critical_alert(self, close_registry):
        monitor = ProximityMonitor()
        alert = monitor.check(close_registry.active(), now=0.0)

        assert alert.threat_id == "atk-1"
        assert alert.level == ThreatLevel.CRITICAL
        assert alert.tone_hz == ALERT_TONES_HZ[ThreatLevel.CRITICAL]

    def test_cooldown(self, close_registry):
        monitor = ProximityMonitor(cooldown_s=2.0)
        assert monitor.check(close_registry.active(), now=0.0) is not None
        assert monitor.check(close_registry.active(), now=1.0) is None
        assert monitor.check(close_registry.active(), now=2.5) is not None

    def test_far_threats_silent(self):
        registry = ThreatRegistry()
        registry.add(MOSCOW, progress=0.1)

        assert ProximityMonitor().check(registry.active(), now=0.0) is None

    def test_low_priority_silent(self):
        registry = ThreatRegistry()
        mogadishu = DEFAULT_CATALOGUE[-1]
        registry.add(mogadishu, progress=0.99)

        assert mogadishu.level == ThreatLevel.LOW
        assert ProximityMonitor().check(registry.active(), now=0.0) is None

    def test_neutralized_silent(self, close_registry):
        close_registry.neutralize("atk-1")
        assert ProximityMonitor().check(close_registry.snapshot(), now=0.0) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
