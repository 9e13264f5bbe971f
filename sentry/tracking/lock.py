"""
Target Lock Tracker

Maintains "locked" semantics on top of the per-cycle motion detector output.
Targets are replaced wholesale every detection cycle; the lock and the reticle
position are the only state that survives between cycles.

Lock Lifecycle:
    SEARCHING -> LOCKED -> (release / empty scene) -> SEARCHING

Acquisition rule: while SEARCHING, every cycle with at least one target rolls
p = sensitivity / 200 on the injected generator. On success one target is
chosen uniformly at random and its centre becomes the reticle position.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from sentry.vision.motion import Target

logger = logging.getLogger(__name__)

RETICLE_HOME: Tuple[float, float] = (50.0, 50.0)


class LockStatus(Enum):
    """Lock lifecycle states."""

    SEARCHING = "searching"  # No target held
    LOCKED = "locked"  # Reticle latched to an acquired target


class TargetLifecycleTracker:
    """
    Random-acquisition target lock with a latched reticle.

    Example:
        >>> tracker = TargetLifecycleTracker(rng=np.random.default_rng(1))
        >>> targets = tracker.update(detector.detect(prev, curr, 80), sensitivity=80)
        >>> if tracker.locked:
        ...     print(tracker.reticle)
    """

    def __init__(
        self,
        release_on_empty: bool = True,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Initialize tracker.

        Args:
            release_on_empty: Drop the lock when a cycle reports no targets
            rng: Random generator for lock rolls and target selection
        """
        self.release_on_empty = release_on_empty
        self.rng = rng if rng is not None else np.random.default_rng()

        self.status = LockStatus.SEARCHING
        self.reticle: Tuple[float, float] = RETICLE_HOME
        self.locked_target_id: Optional[int] = None
        self.acquisitions = 0

    @property
    def locked(self) -> bool:
        return self.status == LockStatus.LOCKED

    @staticmethod
    def lock_probability(sensitivity: float) -> float:
        """Per-cycle acquisition probability for a sensitivity setting."""
        return min(max(sensitivity, 0.0), 100.0) / 200.0

    def update(self, targets: Sequence[Target], sensitivity: float) -> List[Target]:
        """
        Process one detection cycle.

        Steps:
            1. Empty cycle: release the lock if release_on_empty
            2. Already locked: keep the reticle, no re-roll
            3. Searching: roll for acquisition and flag the chosen target

        Args:
            targets: Targets from the current cycle
            sensitivity: Detection sensitivity [0, 100]

        Returns:
            The cycle's targets (the acquired one flagged locked)
        """
        targets = list(targets)

        if not targets:
            if self.release_on_empty and self.locked:
                logger.debug("Scene empty, releasing lock on target %s", self.locked_target_id)
                self.release()
            return targets

        if self.locked:
            return targets

        if self.rng.random() < self.lock_probability(sensitivity):
            index = int(self.rng.integers(len(targets)))
            target = targets[index]
            target.locked = True

            self.status = LockStatus.LOCKED
            self.reticle = (target.x, target.y)
            self.locked_target_id = target.id
            self.acquisitions += 1
            logger.info("Target %d locked at (%.1f, %.1f)", target.id, target.x, target.y)

        return targets

    def release(self) -> None:
        """Drop the lock; the reticle stays where it was."""
        self.status = LockStatus.SEARCHING
        self.locked_target_id = None

    def reset(self) -> None:
        """Drop the lock and recentre the reticle."""
        self.release()
        self.reticle = RETICLE_HOME
