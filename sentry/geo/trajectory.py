"""
Geospatial Trajectory Simulator

Great-circle distance, compass bearing and ballistic-looking arc interpolation
between a threat origin and the defended position.

The arc is NOT a geodesic: latitude and longitude are interpolated linearly and
a sin(t*pi) apex height is added on top, which gives the familiar parabolic
"missile" silhouette on a globe view.

References:
    - Sinnott, R. W. (1984). "Virtues of the Haversine"
    - Veness, C. "Calculate distance, bearing and more between Lat/Long points"
"""

import math
from collections.abc import Sequence
from typing import Iterator, NamedTuple, Union

import numpy as np

from .constants import (
    ARC_ALTITUDE_GAIN,
    ARC_ALTITUDE_REFERENCE_M,
    ARC_BASE_HEIGHT,
    ARC_SEGMENTS,
    EARTH_RADIUS_KM,
    ETA_SENTINEL_S,
    GLOBE_RADIUS,
    MIN_VELOCITY_KMH,
    SECONDS_PER_HOUR,
)


class ArcPoint(NamedTuple):
    """Single trajectory sample: geographic position plus apex height."""

    lat: float
    lng: float
    height: float

    def to_cartesian(self, radius: float = GLOBE_RADIUS) -> np.ndarray:
        """
        Map onto a globe of the given radius (Y up).

        Args:
            radius: Globe radius in scene units (height is added to it)

        Returns:
            [x, y, z] position
        """
        return lat_lng_to_vector(self.lat, self.lng, radius + self.height)


def lat_lng_to_vector(lat: float, lng: float, radius: float) -> np.ndarray:
    """
    Convert latitude/longitude to a 3D point on a sphere.

    phi is the polar angle from +Y, theta the azimuth shifted by 180 deg so
    that lng = 0 faces -X.
    """
    phi = np.radians(90.0 - lat)
    theta = np.radians(lng + 180.0)
    x = -(radius * np.sin(phi) * np.cos(theta))
    z = radius * np.sin(phi) * np.sin(theta)
    y = radius * np.cos(phi)
    return np.array([x, y, z])


def haversine_distance_km(lat_a: float, lng_a: float, lat_b: float, lng_b: float) -> float:
    """
    Great-circle distance between two points.

    d = 2R * atan2(sqrt(a), sqrt(1 - a))
    a = sin²(Δφ/2) + cos φ1 cos φ2 sin²(Δλ/2)

    Args:
        lat_a, lng_a: First point [deg]
        lat_b, lng_b: Second point [deg]

    Returns:
        Distance [km]
    """
    d_lat = math.radians(lat_b - lat_a)
    d_lng = math.radians(lng_b - lng_a)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat_a)) * math.cos(math.radians(lat_b)) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push a a hair outside [0, 1] for antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def initial_bearing_deg(lat_from: float, lng_from: float, lat_to: float, lng_to: float) -> float:
    """
    Initial compass bearing from one point towards another.

    Returns:
        Bearing [deg] in [0, 360), 0 = North, 90 = East
    """
    phi1 = math.radians(lat_from)
    phi2 = math.radians(lat_to)
    d_lng = math.radians(lng_to - lng_from)

    y = math.sin(d_lng) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lng)

    return math.degrees(math.atan2(y, x)) % 360.0


def arc_height_for_altitude(altitude_m: float) -> float:
    """Apex height of the rendered arc; higher cruise altitude -> taller arc."""
    return ARC_BASE_HEIGHT + (altitude_m / ARC_ALTITUDE_REFERENCE_M) * ARC_ALTITUDE_GAIN


def remaining_distance_km(total_distance_km: float, progress: float) -> float:
    """Distance still to cover at the given progress."""
    return total_distance_km * (1.0 - progress)


def eta_seconds(distance_km: float, velocity_kmh: float) -> float:
    """
    Time to cover distance_km at velocity_kmh.

    Stationary (or reversing) threats report ETA_SENTINEL_S instead of
    dividing by zero.
    """
    if velocity_kmh <= MIN_VELOCITY_KMH:
        return ETA_SENTINEL_S
    return distance_km / (velocity_kmh / SECONDS_PER_HOUR)


class ArcPath(Sequence):
    """
    Lazy, finite, restartable trajectory from origin towards destination.

    Points are computed on access; iterating twice yields the same points.
    Only samples i = 0 .. floor(segments * progress) are part of the path, so
    progress = 0 is the origin alone and progress = 1 is the full arc ending at
    the destination.

    Example:
        >>> path = arc_points(55.7558, 37.6173, 9.0192, 38.7525, 0.5, altitude_scale=0.61)
        >>> head = path[-1]
    """

    def __init__(
        self,
        origin_lat: float,
        origin_lng: float,
        dest_lat: float,
        dest_lng: float,
        progress: float = 1.0,
        altitude_scale: float = ARC_BASE_HEIGHT,
        segments: int = ARC_SEGMENTS,
        start_index: int = 0,
    ):
        """
        Args:
            origin_lat, origin_lng: Launch position [deg]
            dest_lat, dest_lng: Defended position [deg]
            progress: Fraction of the journey covered, clamped to [0, 1]
            altitude_scale: Apex height at t = 0.5 [scene units]
            segments: Samples for the full journey
            start_index: First sample index (used by predicted paths)
        """
        if segments < 1:
            raise ValueError(f"segments must be >= 1, got {segments}")

        self.origin = (origin_lat, origin_lng)
        self.destination = (dest_lat, dest_lng)
        self.progress = min(max(progress, 0.0), 1.0)
        self.altitude_scale = altitude_scale
        self.segments = segments

        self._stop = int(math.floor(segments * self.progress)) + 1
        self._start = min(max(start_index, 0), self._stop)

    def _point(self, i: int) -> ArcPoint:
        t = i / self.segments
        lat = self.origin[0] + (self.destination[0] - self.origin[0]) * t
        lng = self.origin[1] + (self.destination[1] - self.origin[1]) * t
        height = math.sin(t * math.pi) * self.altitude_scale
        return ArcPoint(lat, lng, height)

    def __len__(self) -> int:
        return self._stop - self._start

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("ArcPath index out of range")
        return self._point(self._start + index)

    def __iter__(self) -> Iterator[ArcPoint]:
        for i in range(self._start, self._stop):
            yield self._point(i)

    @property
    def head(self) -> ArcPoint:
        """Current position of the threat (last sample)."""
        return self[-1]

    def to_cartesian(self, radius: float = GLOBE_RADIUS) -> np.ndarray:
        """All samples as an (N, 3) array on a globe of the given radius."""
        if len(self) == 0:
            return np.zeros((0, 3))
        return np.vstack([p.to_cartesian(radius) for p in self])


def arc_points(
    origin_lat: float,
    origin_lng: float,
    dest_lat: float,
    dest_lng: float,
    progress: float,
    altitude_scale: float,
    segments: int = ARC_SEGMENTS,
) -> ArcPath:
    """
    Trajectory samples covered so far.

    Args:
        origin_lat, origin_lng: Launch position [deg]
        dest_lat, dest_lng: Defended position [deg]
        progress: Journey fraction [0, 1]
        altitude_scale: Apex height [scene units], see arc_height_for_altitude()
        segments: Samples for the full journey

    Returns:
        ArcPath with floor(segments * progress) + 1 points
    """
    return ArcPath(
        origin_lat, origin_lng, dest_lat, dest_lng, progress, altitude_scale, segments
    )


def predicted_path(
    origin_lat: float,
    origin_lng: float,
    dest_lat: float,
    dest_lng: float,
    progress: float,
    altitude_scale: float,
    segments: int = ARC_SEGMENTS,
) -> ArcPath:
    """
    Remaining trajectory from the current position to the destination.

    The full path is sliced at floor(len(full_path) * progress).
    """
    full_length = segments + 1
    start = int(math.floor(full_length * min(max(progress, 0.0), 1.0)))
    return ArcPath(
        origin_lat,
        origin_lng,
        dest_lat,
        dest_lng,
        1.0,
        altitude_scale,
        segments,
        start_index=start,
    )
