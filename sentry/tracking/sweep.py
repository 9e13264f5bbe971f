"""
Sweep Visibility Controller

Rotating-scan reveal/hide scheduler. An entity becomes visible when the sweep
angle passes within `window_deg` of its bearing and fades after
`fade_duration_s` unless the sweep reveals it again first.

The controller knows nothing about what an entity is: anything exposing `id`
and `angle` (degrees) can be revealed. The same class serves the video panel
(motion targets), the 2D radar (synthetic contacts) and the globe (threats).

Visibility is an explicit id -> expiry map owned by the controller and pruned
by expire(now); no per-entity timers exist.
"""

import threading
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, NamedTuple, Optional, Set


class SweepContact(NamedTuple):
    """Minimal entity for reveal(): identity plus bearing."""

    id: Hashable
    angle: float


def angular_distance(a: float, b: float) -> float:
    """Smallest separation between two bearings [deg], in [0, 180]."""
    d = abs((a % 360.0) - (b % 360.0))
    return min(d, 360.0 - d)


class SweepVisibilityController:
    """
    Generic id + angle visibility scheduler.

    Example:
        >>> sweep = SweepVisibilityController(step_deg=2.0, window_deg=10.0)
        >>> sweep.advance()
        >>> sweep.reveal([SweepContact("atk-1", 3.5)], now=0.03)
        >>> sweep.visible(now=1.0)
        frozenset({'atk-1'})
    """

    def __init__(
        self,
        step_deg: float = 2.0,
        window_deg: float = 10.0,
        fade_duration_s: float = 3.0,
        start_angle: float = 0.0,
    ) -> None:
        """
        Args:
            step_deg: Default advance per tick [deg]
            window_deg: Half-width of the reveal window [deg]
            fade_duration_s: Time a revealed id stays visible [s]
            start_angle: Initial sweep angle [deg]
        """
        self.step_deg = step_deg
        self.window_deg = window_deg
        self.fade_duration_s = fade_duration_s
        self.start_angle = start_angle % 360.0

        self.sweep_angle = self.start_angle
        self._expiry: Dict[Hashable, float] = {}
        self._lock = threading.RLock()

    def advance(self, step_deg: Optional[float] = None) -> float:
        """
        Rotate the sweep.

        Args:
            step_deg: Rotation [deg], defaults to step_deg

        Returns:
            New sweep angle in [0, 360)
        """
        step = self.step_deg if step_deg is None else step_deg
        with self._lock:
            self.sweep_angle = (self.sweep_angle + step) % 360.0
            return self.sweep_angle

    def in_window(self, angle: float) -> bool:
        """True if a bearing lies strictly inside the reveal window (wrapping at 360)."""
        return angular_distance(self.sweep_angle, angle) < self.window_deg

    def reveal(self, entities: Iterable[Any], now: float) -> List[Hashable]:
        """
        Reveal entities under the sweep.

        Re-revealing an id resets its expiry; it is never duplicated.

        Args:
            entities: Objects with `id` and `angle` attributes
            now: Current time [s]

        Returns:
            Ids revealed by this call
        """
        revealed = []
        with self._lock:
            for entity in entities:
                if self.in_window(entity.angle):
                    self._expiry[entity.id] = now + self.fade_duration_s
                    revealed.append(entity.id)
        return revealed

    def expire(self, now: float) -> List[Hashable]:
        """
        Drop ids whose fade has elapsed.

        Returns:
            Ids hidden by this call
        """
        with self._lock:
            expired = [eid for eid, deadline in self._expiry.items() if deadline <= now]
            for eid in expired:
                del self._expiry[eid]
        return expired

    tick = expire

    def visible(self, now: Optional[float] = None) -> FrozenSet[Hashable]:
        """
        Currently visible ids.

        Args:
            now: If given, expired ids are pruned first
        """
        if now is not None:
            self.expire(now)
        with self._lock:
            return frozenset(self._expiry)

    def is_visible(self, entity_id: Hashable) -> bool:
        with self._lock:
            return entity_id in self._expiry

    def expiry_of(self, entity_id: Hashable) -> Optional[float]:
        """Scheduled fade time of an id, or None if hidden."""
        with self._lock:
            return self._expiry.get(entity_id)

    def hide(self, entity_id: Hashable) -> bool:
        """Hide an id immediately. Unknown ids are a no-op (returns False)."""
        with self._lock:
            return self._expiry.pop(entity_id, None) is not None

    def retain(self, entity_ids: Set[Hashable]) -> None:
        """Hide every id not in entity_ids (e.g. neutralized threats)."""
        with self._lock:
            for eid in [eid for eid in self._expiry if eid not in entity_ids]:
                del self._expiry[eid]

    def clear(self) -> None:
        """Hide everything and return the sweep to its start angle."""
        with self._lock:
            self._expiry.clear()
            self.sweep_angle = self.start_angle
