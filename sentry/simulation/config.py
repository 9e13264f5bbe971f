"""
Session Configuration

Tunable constants of a sentry session grouped per component. Defaults match
the dashboard's stock behaviour; ConfigLoader (sentry.io) fills these from a
YAML file.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sentry.geo.constants import DEFAULT_DEFENDED_LAT, DEFAULT_DEFENDED_LNG

from .objects import ThreatOrigin


@dataclass
class DetectorConfig:
    """FrameMotionDetector settings."""

    block_size: int = 10
    cluster_radius: float = 15.0
    padding: float = 5.0
    min_size: float = 5.0
    size_divisor: float = 10.0
    max_targets: int = 3
    min_cluster_size: int = 1


@dataclass
class LockConfig:
    """TargetLifecycleTracker settings."""

    release_on_empty: bool = True


@dataclass
class SweepConfig:
    """SweepVisibilityController settings (shared by every panel)."""

    step_deg: float = 2.0
    window_deg: float = 10.0
    fade_duration_s: float = 3.0


@dataclass
class ThreatConfig:
    """ThreatRegistry and ProximityMonitor settings."""

    defended_lat: float = DEFAULT_DEFENDED_LAT
    defended_lng: float = DEFAULT_DEFENDED_LNG
    base_increment: float = 0.003
    velocity_divisor: float = 100_000.0
    wrap_progress: float = 0.05
    progress_range: Tuple[float, float] = (0.1, 0.4)
    proximity_km: float = 1000.0
    critical_km: float = 500.0
    alert_cooldown_s: float = 2.0
    catalogue: Optional[List[ThreatOrigin]] = None  # None -> DEFAULT_CATALOGUE


@dataclass
class TickConfig:
    """Ticker periods [s]."""

    sweep_s: float = 0.03
    threats_s: float = 0.05
    motion_s: float = 0.5
    visibility_s: float = 0.03
    contacts_s: float = 12.0
    max_catch_up: int = 5


@dataclass
class ContactConfig:
    """RadarContactGenerator settings."""

    enabled: bool = True
    min_count: int = 3
    max_count: int = 7


@dataclass
class SessionConfig:
    """Session-wide settings."""

    name: str = "Sentry Session"
    sensitivity: float = 50.0
    seed: Optional[int] = None
    motion_log_probability: float = 0.3
    history_length: int = 20
    max_events: int = 200


@dataclass
class SentryConfig:
    """Complete session configuration."""

    session: SessionConfig = field(default_factory=SessionConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)
    lock: LockConfig = field(default_factory=LockConfig)
    sweep: SweepConfig = field(default_factory=SweepConfig)
    threats: ThreatConfig = field(default_factory=ThreatConfig)
    ticks: TickConfig = field(default_factory=TickConfig)
    contacts: ContactConfig = field(default_factory=ContactConfig)
