"""
Geodesy and Timing Constants for the Sentry Simulation

Values used by the trajectory simulator and the threat registry.

References:
    - Sinnott, R. W. (1984). "Virtues of the Haversine", Sky and Telescope 68(2)
    - IUGG mean Earth radius (R1)
"""

from typing import Final

# =============================================================================
# EARTH PARAMETERS
# =============================================================================

EARTH_RADIUS_KM: Final[float] = 6371.0
"""Mean Earth radius [km] - IUGG R1"""

SECONDS_PER_HOUR: Final[float] = 3600.0
"""Conversion factor km/h -> km/s"""

# =============================================================================
# DEFENDED POSITION
# =============================================================================

DEFAULT_DEFENDED_LAT: Final[float] = 9.0192
"""Default defended position latitude [deg] - Addis Ababa"""

DEFAULT_DEFENDED_LNG: Final[float] = 38.7525
"""Default defended position longitude [deg] - Addis Ababa"""

# =============================================================================
# TRAJECTORY RENDERING
# =============================================================================

ARC_SEGMENTS: Final[int] = 60
"""Number of interpolation segments for a full origin -> destination arc"""

GLOBE_RADIUS: Final[float] = 2.0
"""Globe radius in scene units used by to_cartesian()"""

ARC_BASE_HEIGHT: Final[float] = 0.4
"""Minimum apex height of a trajectory arc [scene units]"""

ARC_ALTITUDE_GAIN: Final[float] = 0.3
"""Additional apex height per ARC_ALTITUDE_REFERENCE_M of cruise altitude"""

ARC_ALTITUDE_REFERENCE_M: Final[float] = 50_000.0
"""Altitude normalisation for arc height [m]"""

# =============================================================================
# ETA
# =============================================================================

ETA_SENTINEL_S: Final[float] = 999_999.0
"""ETA reported for stationary or reversing threats [s]"""

MIN_VELOCITY_KMH: Final[float] = 1e-6
"""Velocities at or below this are treated as stationary [km/h]"""
