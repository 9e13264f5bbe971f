"""
Simulation Objects

Threat data model for the geospatial threat simulator.

A ThreatOrigin is an immutable catalogue entry (where a wave launches from and
how it flies). A Threat is the per-session, in-flight instance of an origin:
its progress advances every tick and distance/ETA are derived from it.

Lifecycle:
    spawn -> in-flight (progress wraps to a small epsilon at 1.0) -> neutralized
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict


class ThreatKind(Enum):
    """Threat platform types."""

    MISSILE = "missile"
    DRONE = "drone"
    AIRCRAFT = "aircraft"
    CYBER = "cyber"
    ARTILLERY = "artillery"


class ThreatLevel(Enum):
    """Threat priority, highest first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ThreatOrigin:
    """
    Catalogue entry for a threat source.

    Attributes:
        id: Threat identifier (kept by every spawned instance)
        lat, lng: Launch position [deg]
        name: Launch site name
        country: Launch site country
        kind: Platform type
        level: Priority
        velocity_kmh: Cruise speed [km/h]
        altitude_m: Cruise altitude [m]
    """

    id: str
    lat: float
    lng: float
    name: str
    country: str
    kind: ThreatKind
    level: ThreatLevel
    velocity_kmh: float
    altitude_m: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML/JSON output."""
        data = asdict(self)
        data["kind"] = self.kind.value
        data["level"] = self.level.value
        return data


@dataclass
class Threat:
    """
    In-flight threat.

    distance_km and eta_seconds are derived from progress by the registry and
    are never set independently.

    Attributes:
        id: Threat identifier
        origin_lat, origin_lng: Launch position [deg]
        origin_name, origin_country: Launch site labels
        kind: Platform type
        level: Priority
        velocity_kmh: Cruise speed [km/h]
        altitude_m: Cruise altitude [m]
        eta_seconds: Time to impact [s]
        progress: Journey fraction [0, 1]
        distance_km: Remaining great-circle distance [km]
        neutralized: Terminal flag
    """

    id: str
    origin_lat: float
    origin_lng: float
    origin_name: str
    origin_country: str
    kind: ThreatKind
    level: ThreatLevel
    velocity_kmh: float
    altitude_m: float
    eta_seconds: float = 0.0
    progress: float = 0.0
    distance_km: float = 0.0
    neutralized: bool = False

    @classmethod
    def from_origin(cls, origin: ThreatOrigin, progress: float = 0.0) -> "Threat":
        """Create an in-flight instance of a catalogue entry."""
        return cls(
            id=origin.id,
            origin_lat=origin.lat,
            origin_lng=origin.lng,
            origin_name=origin.name,
            origin_country=origin.country,
            kind=origin.kind,
            level=origin.level,
            velocity_kmh=origin.velocity_kmh,
            altitude_m=origin.altitude_m,
            progress=progress,
        )

    @property
    def active(self) -> bool:
        return not self.neutralized

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for renderers."""
        data = asdict(self)
        data["kind"] = self.kind.value
        data["level"] = self.level.value
        return data
