"""
Threat Registry

Owns every in-flight threat of a session and advances them tick by tick.

Progress model:
    progress += (base_increment + velocity_kmh / velocity_divisor) * step

so faster platforms close in faster regardless of tick rate. A threat reaching
progress 1.0 wraps to `wrap_progress` (a new wave from the same origin) until
it is neutralized.

Derived quantities (recomputed from progress on every change):
    distance_km = total_distance_km * (1 - progress)
    eta_seconds = distance_km / (velocity_kmh / 3600)

The registry is an explicit object handed to every consumer (2D radar, globe,
alert monitor); a neutralize() issued through one view is visible to all views
reading the same instance. Mutations are serialized by a single lock; readers
receive copies via snapshot().
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from sentry.geo.constants import ARC_SEGMENTS, DEFAULT_DEFENDED_LAT, DEFAULT_DEFENDED_LNG
from sentry.geo.trajectory import (
    ArcPath,
    arc_height_for_altitude,
    arc_points,
    eta_seconds,
    haversine_distance_km,
    initial_bearing_deg,
    predicted_path,
    remaining_distance_km,
)
from sentry.tracking.sweep import SweepContact

from .objects import Threat, ThreatLevel, ThreatOrigin

logger = logging.getLogger(__name__)


class ThreatRegistry:
    """
    Entity store and per-tick progress state machine for threats.

    Example:
        >>> registry = ThreatRegistry(rng=np.random.default_rng(3))
        >>> registry.spawn(DEFAULT_CATALOGUE)
        >>> registry.tick()
        >>> registry.neutralize("atk-1")
        True
        >>> registry.counts()["critical"]
        1
    """

    def __init__(
        self,
        defended_lat: float = DEFAULT_DEFENDED_LAT,
        defended_lng: float = DEFAULT_DEFENDED_LNG,
        base_increment: float = 0.003,
        velocity_divisor: float = 100_000.0,
        wrap_progress: float = 0.05,
        progress_range: Tuple[float, float] = (0.1, 0.4),
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize registry.

        Args:
            defended_lat, defended_lng: Destination of every threat [deg]
            base_increment: Progress added per tick regardless of speed
            velocity_divisor: km/h per unit of extra progress per tick
            wrap_progress: Progress assigned when a threat reaches 1.0
            progress_range: Uniform range of initial progress at spawn
            rng: Random generator for initial progress
        """
        if not 0.0 <= wrap_progress < 1.0:
            raise ValueError(f"wrap_progress must be in [0, 1), got {wrap_progress}")
        low, high = progress_range
        if not 0.0 <= low <= high <= 1.0:
            raise ValueError(f"progress_range must satisfy 0 <= low <= high <= 1, got {progress_range}")

        self.defended_lat = defended_lat
        self.defended_lng = defended_lng
        self.base_increment = base_increment
        self.velocity_divisor = velocity_divisor
        self.wrap_progress = wrap_progress
        self.progress_range = (low, high)
        self.rng = rng if rng is not None else np.random.default_rng()

        # Ordered by insertion so snapshots are stable
        self._threats: Dict[str, Threat] = {}
        self._total_km: Dict[str, float] = {}
        self._lock = threading.RLock()

        self.tick_count = 0
        self.waves = 0

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def spawn(self, catalogue: Iterable[ThreatOrigin]) -> List[Threat]:
        """
        Replace the population with one instance per catalogue entry.

        Initial progress is drawn uniformly from progress_range so the waves
        do not start in lockstep.

        Returns:
            Copies of the spawned threats
        """
        with self._lock:
            self._threats.clear()
            self._total_km.clear()
            self.tick_count = 0
            self.waves = 0
            for origin in catalogue:
                self.add(origin)
            logger.info("Spawned %d threats", len(self._threats))
            return self.snapshot()

    def add(self, origin: ThreatOrigin, progress: Optional[float] = None) -> Threat:
        """
        Add a single threat.

        Args:
            origin: Catalogue entry
            progress: Initial progress (random within progress_range if None)

        Returns:
            Copy of the new threat
        """
        if progress is None:
            progress = float(self.rng.uniform(*self.progress_range))

        threat = Threat.from_origin(origin, min(max(progress, 0.0), 1.0))
        with self._lock:
            self._threats[threat.id] = threat
            self._total_km[threat.id] = haversine_distance_km(
                threat.origin_lat, threat.origin_lng, self.defended_lat, self.defended_lng
            )
            self._recompute(threat)
            return replace(threat)

    def clear(self) -> None:
        """Drop every threat."""
        with self._lock:
            self._threats.clear()
            self._total_km.clear()
            self.tick_count = 0
            self.waves = 0

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def progress_increment(self, velocity_kmh: float) -> float:
        """Progress added per unit step for a platform speed."""
        return self.base_increment + velocity_kmh / self.velocity_divisor

    def tick(self, step: float = 1.0) -> List[str]:
        """
        Advance every non-neutralized threat.

        Args:
            step: Tick multiplier (1.0 = one fixed simulation tick)

        Returns:
            Ids of threats that reached the target and wrapped this tick
        """
        wrapped = []
        with self._lock:
            self.tick_count += 1
            for threat in self._threats.values():
                if threat.neutralized:
                    continue

                progress = threat.progress + self.progress_increment(threat.velocity_kmh) * step
                progress = max(progress, 0.0)
                if progress >= 1.0:
                    progress = self.wrap_progress
                    wrapped.append(threat.id)

                threat.progress = progress
                self._recompute(threat)

            if wrapped:
                self.waves += len(wrapped)
                logger.debug("Impact, new wave: %s", ", ".join(wrapped))

        return wrapped

    def _recompute(self, threat: Threat) -> None:
        """Derive distance and ETA from progress."""
        threat.distance_km = remaining_distance_km(self._total_km[threat.id], threat.progress)
        threat.eta_seconds = eta_seconds(threat.distance_km, threat.velocity_kmh)

    def set_progress(self, threat_id: str, progress: float) -> bool:
        """
        Force a threat's progress (clamped to [0, 1]) and recompute.

        Returns:
            False for unknown ids
        """
        with self._lock:
            threat = self._threats.get(threat_id)
            if threat is None:
                return False
            threat.progress = min(max(progress, 0.0), 1.0)
            self._recompute(threat)
            return True

    def neutralize(self, threat_id: str) -> bool:
        """
        Mark a threat neutralized (terminal).

        Unknown or already neutralized ids are a no-op.

        Returns:
            True if the threat changed state
        """
        with self._lock:
            threat = self._threats.get(threat_id)
            if threat is None or threat.neutralized:
                return False
            threat.neutralized = True
            logger.info("Threat %s (%s) neutralized", threat.id, threat.origin_name)
            return True

    def relocate(self, defended_lat: float, defended_lng: float) -> None:
        """Move the defended position; total distances and ETAs are recomputed."""
        with self._lock:
            self.defended_lat = defended_lat
            self.defended_lng = defended_lng
            for threat in self._threats.values():
                self._total_km[threat.id] = haversine_distance_km(
                    threat.origin_lat, threat.origin_lng, defended_lat, defended_lng
                )
                self._recompute(threat)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, threat_id: str) -> Optional[Threat]:
        """Copy of a threat, or None."""
        with self._lock:
            threat = self._threats.get(threat_id)
            return replace(threat) if threat is not None else None

    def snapshot(self) -> List[Threat]:
        """Copies of every threat, neutralized included."""
        with self._lock:
            return [replace(t) for t in self._threats.values()]

    def active(self) -> List[Threat]:
        """Copies of the threats still in flight."""
        with self._lock:
            return [replace(t) for t in self._threats.values() if not t.neutralized]

    def counts(self) -> Dict[str, int]:
        """Active threats per level (neutralized threats excluded)."""
        tally = {level.value: 0 for level in ThreatLevel}
        for threat in self.active():
            tally[threat.level.value] += 1
        return tally

    def total_distance_km(self, threat_id: str) -> Optional[float]:
        """Origin -> defended position great-circle distance."""
        with self._lock:
            return self._total_km.get(threat_id)

    def bearing(self, threat_id: str) -> Optional[float]:
        """Direction of the threat origin seen from the defended position [deg]."""
        threat = self.get(threat_id)
        if threat is None:
            return None
        return initial_bearing_deg(
            self.defended_lat, self.defended_lng, threat.origin_lat, threat.origin_lng
        )

    def sweep_entities(self) -> List[SweepContact]:
        """Active threats as id + bearing for a sweep controller."""
        return [
            SweepContact(
                t.id,
                initial_bearing_deg(self.defended_lat, self.defended_lng, t.origin_lat, t.origin_lng),
            )
            for t in self.active()
        ]

    def arc(self, threat_id: str, segments: int = ARC_SEGMENTS) -> Optional[ArcPath]:
        """
        Trajectory flown so far.

        Returns:
            ArcPath, or None for unknown or neutralized threats
        """
        threat = self.get(threat_id)
        if threat is None or threat.neutralized:
            return None
        return arc_points(
            threat.origin_lat,
            threat.origin_lng,
            self.defended_lat,
            self.defended_lng,
            threat.progress,
            arc_height_for_altitude(threat.altitude_m),
            segments,
        )

    def prediction(self, threat_id: str, segments: int = ARC_SEGMENTS) -> Optional[ArcPath]:
        """Remaining trajectory to the defended position (None if not in flight)."""
        threat = self.get(threat_id)
        if threat is None or threat.neutralized:
            return None
        return predicted_path(
            threat.origin_lat,
            threat.origin_lng,
            self.defended_lat,
            self.defended_lng,
            threat.progress,
            arc_height_for_altitude(threat.altitude_m),
            segments,
        )

    def __len__(self) -> int:
        return len(self._threats)

    def __contains__(self, threat_id: object) -> bool:
        return threat_id in self._threats
