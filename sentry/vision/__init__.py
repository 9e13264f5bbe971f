"""
Vision Package

Frame-differencing motion detection on video frames.

Components:
    - FrameMotionDetector: Block sampling, thresholding and clustering
    - Target: Bounding-box target in percent-of-frame coordinates
    - SyntheticFrameSource: Moving-blob frames for hardware-free runs

Example:
    >>> from sentry.vision import FrameMotionDetector
    >>> detector = FrameMotionDetector()
    >>> targets = detector.detect(prev_frame, curr_frame, sensitivity=50)
"""

from .motion import (
    CandidateBlock,
    FrameMotionDetector,
    Target,
    as_rgba_frame,
    detect_motion,
    motion_threshold,
)
from .synthetic import SyntheticFrameSource

__all__ = [
    "FrameMotionDetector",
    "Target",
    "CandidateBlock",
    "detect_motion",
    "motion_threshold",
    "as_rgba_frame",
    "SyntheticFrameSource",
]
