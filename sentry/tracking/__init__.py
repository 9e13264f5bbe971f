"""
Tracking Module

Lock management and sweep visibility for tracked entities.

Components:
    - TargetLifecycleTracker: Random-acquisition lock with latched reticle
    - LockStatus: Lock lifecycle states
    - SweepVisibilityController: Rotating-angle reveal/hide scheduler
    - SweepContact: Minimal id + angle entity

Example:
    >>> from sentry.tracking import SweepVisibilityController
    >>> sweep = SweepVisibilityController(window_deg=10.0, fade_duration_s=3.0)
    >>> sweep.advance(2.0)
"""

from .lock import LockStatus, TargetLifecycleTracker
from .sweep import SweepContact, SweepVisibilityController, angular_distance

__all__ = [
    "TargetLifecycleTracker",
    "LockStatus",
    "SweepVisibilityController",
    "SweepContact",
    "angular_distance",
]
