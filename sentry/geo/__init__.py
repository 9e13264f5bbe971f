"""
Geo Package

Great-circle geometry and trajectory interpolation for threat simulation.

Modules:
    - constants: Earth radius, arc rendering and ETA constants
    - trajectory: Haversine distance, bearing, arc interpolation, ETA
"""

from .constants import (
    DEFAULT_DEFENDED_LAT,
    DEFAULT_DEFENDED_LNG,
    EARTH_RADIUS_KM,
    ETA_SENTINEL_S,
)
from .trajectory import (
    ArcPath,
    ArcPoint,
    arc_height_for_altitude,
    arc_points,
    eta_seconds,
    haversine_distance_km,
    initial_bearing_deg,
    lat_lng_to_vector,
    predicted_path,
    remaining_distance_km,
)

__all__ = [
    # Constants
    "EARTH_RADIUS_KM",
    "ETA_SENTINEL_S",
    "DEFAULT_DEFENDED_LAT",
    "DEFAULT_DEFENDED_LNG",
    # Trajectory
    "ArcPath",
    "ArcPoint",
    "arc_points",
    "predicted_path",
    "arc_height_for_altitude",
    "haversine_distance_km",
    "initial_bearing_deg",
    "lat_lng_to_vector",
    "remaining_distance_km",
    "eta_seconds",
]
