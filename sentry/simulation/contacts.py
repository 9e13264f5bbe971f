"""
Synthetic Radar Contacts

Random local radar returns for the 2D/3D radar panels, regenerated on a slow
period. Each contact carries a short trajectory history drifting behind it and
a predicted path ahead of it, both in the panel's polar frame (angle in
degrees, distance in percent of display radius).
"""

import itertools
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np


class ContactKind(Enum):
    """IFF classification of a radar contact."""

    HOSTILE = "hostile"
    NEUTRAL = "neutral"
    UNKNOWN = "unknown"
    FRIENDLY = "friendly"


@dataclass
class RadarContact:
    """
    Synthetic radar return.

    Attributes:
        id: Unique contact identifier
        label: Operator label (TGT-01 ...)
        angle: Bearing [deg]
        distance: Range [% of display radius]
        altitude: Relative altitude [0, 100]
        kind: IFF classification
        velocity: Speed [m/s]
        trajectory: Past (angle, distance) samples, newest first
        predicted_path: Future (x, y) display points [%]
    """

    id: str
    label: str
    angle: float
    distance: float
    altitude: float
    kind: ContactKind
    velocity: float
    trajectory: List[Tuple[float, float]] = field(default_factory=list)
    predicted_path: List[Tuple[float, float]] = field(default_factory=list)


def polar_to_display(angle: float, distance: float, scale: float = 2.2) -> Tuple[float, float]:
    """
    Polar radar coordinates to panel percent coordinates.

    0 deg points up, angles grow clockwise, the centre is (50, 50).
    """
    radians = math.radians(angle - 90.0)
    return (50.0 + (distance / scale) * math.cos(radians), 50.0 + (distance / scale) * math.sin(radians))


class RadarContactGenerator:
    """Random contact population for the radar panels."""

    def __init__(
        self,
        min_count: int = 3,
        max_count: int = 7,
        history_points: int = 5,
        prediction_points: int = 4,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Args:
            min_count, max_count: Inclusive population bounds per generation
            history_points: Trajectory samples behind each contact
            prediction_points: Predicted samples ahead of each contact
            rng: Random generator
        """
        if not 1 <= min_count <= max_count:
            raise ValueError(f"Invalid contact count bounds: {min_count}..{max_count}")

        self.min_count = min_count
        self.max_count = max_count
        self.history_points = history_points
        self.prediction_points = prediction_points
        self.rng = rng if rng is not None else np.random.default_rng()
        self._generation = itertools.count(1)

    def generate(self) -> List[RadarContact]:
        """Draw a fresh population."""
        generation = next(self._generation)
        count = int(self.rng.integers(self.min_count, self.max_count + 1))
        kinds = list(ContactKind)

        contacts = []
        for i in range(count):
            angle = float(self.rng.uniform(0, 360))
            distance = float(self.rng.uniform(20, 80))

            trajectory = [
                (
                    (angle - j * 2 + self.rng.uniform(0, 2)) % 360.0,
                    distance - j * 3 + self.rng.uniform(0, 2),
                )
                for j in range(self.history_points)
            ]
            predicted = [
                polar_to_display(angle + j * 3, distance + j * 4)
                for j in range(1, self.prediction_points + 1)
            ]

            contacts.append(
                RadarContact(
                    id=f"contact-{generation}-{i}",
                    label=f"TGT-{i + 1:02d}",
                    angle=angle,
                    distance=distance,
                    altitude=float(self.rng.uniform(0, 100)),
                    kind=kinds[int(self.rng.integers(len(kinds)))],
                    velocity=float(self.rng.uniform(100, 800)),
                    trajectory=trajectory,
                    predicted_path=predicted,
                )
            )

        return contacts
