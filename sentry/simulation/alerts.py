"""
Proximity Alerts

Raises an alert when a high-priority threat closes within range of the
defended position.

Rules (first matching threat wins):
    - level CRITICAL and distance < critical_km        -> CRITICAL alert
    - level CRITICAL/HIGH and distance < proximity_km  -> alert at threat level

A single global cooldown rate-limits alerts. Tone frequencies are carried as
metadata for an audio layer; nothing here plays sound.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from .objects import Threat, ThreatLevel

ALERT_TONES_HZ: Dict[ThreatLevel, float] = {
    ThreatLevel.CRITICAL: 880.0,  # A5
    ThreatLevel.HIGH: 660.0,  # E5
    ThreatLevel.MEDIUM: 440.0,  # A4
    ThreatLevel.LOW: 330.0,  # E4
}


@dataclass
class ProximityAlert:
    """Single proximity alert."""

    threat_id: str
    level: ThreatLevel
    distance_km: float
    tone_hz: float
    timestamp: float


class ProximityMonitor:
    """Distance-threshold alerting with a shared cooldown."""

    def __init__(
        self, proximity_km: float = 1000.0, critical_km: float = 500.0, cooldown_s: float = 2.0
    ):
        self.proximity_km = proximity_km
        self.critical_km = critical_km
        self.cooldown_s = cooldown_s
        self._last_alert_time: Optional[float] = None

    def classify(self, threat: Threat) -> Optional[ThreatLevel]:
        """Alert level a threat would raise, or None."""
        if threat.neutralized:
            return None
        if threat.level == ThreatLevel.CRITICAL and threat.distance_km < self.critical_km:
            return ThreatLevel.CRITICAL
        if threat.level in (ThreatLevel.CRITICAL, ThreatLevel.HIGH) and (
            threat.distance_km < self.proximity_km
        ):
            return threat.level
        return None

    def check(self, threats: Iterable[Threat], now: float) -> Optional[ProximityAlert]:
        """
        Evaluate threats and emit at most one alert.

        Args:
            threats: Threats to evaluate (in priority order)
            now: Current time [s]

        Returns:
            ProximityAlert, or None if nothing is close or the cooldown is running
        """
        if self._last_alert_time is not None and now - self._last_alert_time < self.cooldown_s:
            return None

        for threat in threats:
            level = self.classify(threat)
            if level is None:
                continue
            self._last_alert_time = now
            return ProximityAlert(
                threat_id=threat.id,
                level=level,
                distance_km=threat.distance_km,
                tone_hz=ALERT_TONES_HZ[level],
                timestamp=now,
            )

        return None

    def reset(self) -> None:
        self._last_alert_time = None
