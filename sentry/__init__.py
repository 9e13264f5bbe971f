"""
Sentry Source Package

Surveillance dashboard core with:
- Frame-differencing motion detection and target lock
- Great-circle threat simulation toward a defended position
- Rotating sweep visibility for video, radar and globe panels
- YAML session configuration
"""

from sentry.geo import haversine_distance_km, initial_bearing_deg
from sentry.io import ConfigLoader, EventLog
from sentry.simulation import SentryConfig, SentryEngine, ThreatRegistry
from sentry.tracking import SweepVisibilityController, TargetLifecycleTracker
from sentry.vision import FrameMotionDetector, SyntheticFrameSource, Target

__version__ = "1.0.0"
__author__ = "Sentry Contributors"

__all__ = [
    # Geo
    "haversine_distance_km",
    "initial_bearing_deg",
    # Vision
    "FrameMotionDetector",
    "Target",
    "SyntheticFrameSource",
    # Tracking
    "TargetLifecycleTracker",
    "SweepVisibilityController",
    # Simulation
    "SentryEngine",
    "SentryConfig",
    "ThreatRegistry",
    # I/O
    "ConfigLoader",
    "EventLog",
]
