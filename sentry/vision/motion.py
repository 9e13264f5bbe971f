"""
Frame-Differencing Motion Detector

Turns a pair of consecutive video frames into a short list of bounding-box
targets.

Pipeline:
    1. Sample the anchor pixel of every block on a regular grid
    2. diff = mean(|ΔR|, |ΔG|, |ΔB|) per block
    3. Candidate blocks: diff > 30 * sensitivity / 100
    4. Single-linkage clustering in percent-of-frame coordinates
    5. One Target per cluster, sorted by confidence, capped

Coordinates are percentages of the frame span (0-100) on both axes so the
result is independent of capture resolution.

Reference: Jain, R. & Nagel, H. (1979). "On the Analysis of Accumulative
Difference Pictures from Image Sequences of Real World Scenes", IEEE PAMI
"""

import itertools
import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

import numba
import numpy as np

logger = logging.getLogger(__name__)

BASE_THRESHOLD: float = 30.0
"""Diff threshold at sensitivity 100 [intensity levels]"""


@dataclass
class Target:
    """
    Motion target in percent-of-frame coordinates.

    Attributes:
        id: Identifier, unique per detector instance
        x, y: Box centre [0, 100]
        width, height: Box size (0, 100]
        confidence: Detection confidence [0, 100]
        locked: Set by the lock tracker on the acquired target
    """

    id: int
    x: float
    y: float
    width: float
    height: float
    confidence: float
    locked: bool = False

    @property
    def angle(self) -> float:
        """Bearing of the box centre seen from the frame centre [deg], 0 = up, clockwise."""
        return math.degrees(math.atan2(self.x - 50.0, 50.0 - self.y)) % 360.0

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the presentation layer."""
        return asdict(self)


class CandidateBlock(NamedTuple):
    """Grid block whose anchor pixel changed more than the threshold."""

    x: float  # [% of width]
    y: float  # [% of height]
    diff: float  # mean RGB delta


@numba.jit(nopython=True, cache=True)
def _single_linkage_jit(xs: np.ndarray, ys: np.ndarray, radius: float) -> Tuple[np.ndarray, int]:
    """
    JIT-compiled single-linkage clustering.

    Two points share a cluster when a chain of points connects them in which
    each consecutive pair is closer than radius (Euclidean).

    Args:
        xs: Point x coordinates
        ys: Point y coordinates
        radius: Linkage distance (exclusive)

    Returns:
        Tuple of (label per point, number of clusters)
    """
    n = len(xs)
    labels = np.full(n, -1, dtype=np.int64)
    stack = np.empty(n, dtype=np.int64)
    radius_sq = radius * radius
    n_clusters = 0

    for seed in range(n):
        if labels[seed] >= 0:
            continue

        labels[seed] = n_clusters
        stack[0] = seed
        top = 1

        while top > 0:
            top -= 1
            i = stack[top]
            for j in range(n):
                if labels[j] >= 0:
                    continue
                dx = xs[i] - xs[j]
                dy = ys[i] - ys[j]
                if dx * dx + dy * dy < radius_sq:
                    labels[j] = n_clusters
                    stack[top] = j
                    top += 1

        n_clusters += 1

    return labels, n_clusters


def motion_threshold(sensitivity: float, base_threshold: float = BASE_THRESHOLD) -> float:
    """
    Candidate threshold for a sensitivity setting.

    threshold = base * sensitivity / 100, applied as-is: the numeric threshold
    rises with the setting.
    """
    sensitivity = min(max(float(sensitivity), 0.0), 100.0)
    return base_threshold * sensitivity / 100.0


def as_rgba_frame(buffer: Sequence[int], width: int, height: int) -> Optional[np.ndarray]:
    """
    Reshape a flat RGBA buffer (canvas ImageData layout) to (height, width, 4).

    Returns:
        Frame array, or None if the buffer length does not match
    """
    data = np.asarray(buffer, dtype=np.uint8)
    if width <= 0 or height <= 0 or data.size != width * height * 4:
        return None
    return data.reshape(height, width, 4)


class FrameMotionDetector:
    """
    Block-sampling frame differencer with single-linkage target clustering.

    Example:
        >>> detector = FrameMotionDetector(block_size=10, cluster_radius=15.0)
        >>> targets = detector.detect(prev_frame, curr_frame, sensitivity=50)
        >>> for t in targets:
        ...     print(f"Target {t.id}: ({t.x:.1f}, {t.y:.1f}) {t.confidence:.0f}%")
    """

    def __init__(
        self,
        block_size: int = 10,
        cluster_radius: float = 15.0,
        padding: float = 5.0,
        min_size: float = 5.0,
        size_divisor: float = 10.0,
        max_targets: int = 3,
        min_cluster_size: int = 1,
        base_threshold: float = BASE_THRESHOLD,
    ) -> None:
        """
        Initialize detector.

        Args:
            block_size: Grid stride between sampled pixels [px]
            cluster_radius: Linkage distance [% of frame]
            padding: Added to each box extent [% of frame]
            min_size: Floor for box width/height [% of frame]
            size_divisor: Cluster size at which confidence equals the avg diff
            max_targets: Maximum targets returned per cycle
            min_cluster_size: Clusters with fewer blocks are dropped
            base_threshold: Diff threshold at sensitivity 100
        """
        if block_size < 1:
            raise ValueError(f"block_size must be >= 1, got {block_size}")

        self.block_size = int(block_size)
        self.cluster_radius = cluster_radius
        self.padding = padding
        self.min_size = min_size
        self.size_divisor = size_divisor
        self.max_targets = max_targets
        self.min_cluster_size = max(1, int(min_cluster_size))
        self.base_threshold = base_threshold

        self._ids = itertools.count(1)

    def detect(self, prev_frame: Any, curr_frame: Any, sensitivity: float) -> List[Target]:
        """
        Detect moving regions between two frames.

        Never raises: a missing previous frame, mismatched dimensions or a
        malformed buffer yield an empty list.

        Args:
            prev_frame: Previous frame, (H, W, C) array with C >= 3
            curr_frame: Current frame, same shape
            sensitivity: Detection sensitivity [0, 100]

        Returns:
            Targets sorted by confidence (highest first)
        """
        try:
            blocks = self.candidate_blocks(prev_frame, curr_frame, sensitivity)
        except (TypeError, ValueError) as exc:
            logger.debug("Frame rejected: %s", exc)
            return []

        return self.group_into_targets(blocks)

    def candidate_blocks(
        self, prev_frame: Any, curr_frame: Any, sensitivity: float
    ) -> List[CandidateBlock]:
        """
        Sample anchor pixels and keep the blocks above threshold.

        Returns:
            Candidate blocks in percent coordinates (empty for invalid input)
        """
        prev = self._validate(prev_frame)
        curr = self._validate(curr_frame)
        if prev is None or curr is None or prev.shape[:2] != curr.shape[:2]:
            return []

        height, width = prev.shape[:2]
        step = self.block_size

        # Anchor pixel of each block, RGB only
        prev_rgb = prev[::step, ::step, :3].astype(np.float64)
        curr_rgb = curr[::step, ::step, :3].astype(np.float64)
        diffs = np.abs(prev_rgb - curr_rgb).mean(axis=2)

        threshold = motion_threshold(sensitivity, self.base_threshold)
        rows, cols = np.nonzero(diffs > threshold)

        return [
            CandidateBlock(
                x=(col * step / width) * 100.0,
                y=(row * step / height) * 100.0,
                diff=float(diffs[row, col]),
            )
            for row, col in zip(rows, cols)
        ]

    def group_into_targets(self, blocks: Sequence[CandidateBlock]) -> List[Target]:
        """
        Cluster candidate blocks into targets.

        Args:
            blocks: Candidate blocks in percent coordinates

        Returns:
            Up to max_targets targets, highest confidence first
        """
        if len(blocks) == 0:
            return []

        xs = np.array([b.x for b in blocks], dtype=np.float64)
        ys = np.array([b.y for b in blocks], dtype=np.float64)
        diffs = np.array([b.diff for b in blocks], dtype=np.float64)

        labels, n_clusters = _single_linkage_jit(xs, ys, float(self.cluster_radius))

        targets = []
        for label in range(n_clusters):
            members = labels == label
            count = int(members.sum())
            if count < self.min_cluster_size:
                continue
            targets.append(self._build_target(xs[members], ys[members], diffs[members]))

        targets.sort(key=lambda t: t.confidence, reverse=True)
        return targets[: self.max_targets]

    def _build_target(self, xs: np.ndarray, ys: np.ndarray, diffs: np.ndarray) -> Target:
        """Bounding box (padded, floored) and confidence for one cluster."""
        min_x, max_x = float(xs.min()), float(xs.max())
        min_y, max_y = float(ys.min()), float(ys.max())

        width = min(100.0, max(self.min_size, max_x - min_x + self.padding))
        height = min(100.0, max(self.min_size, max_y - min_y + self.padding))

        # confidence = avg_diff * (cluster size / size_divisor)
        confidence = float(diffs.mean()) * (len(diffs) / self.size_divisor)

        return Target(
            id=next(self._ids),
            x=min(100.0, min_x + width / 2),
            y=min(100.0, min_y + height / 2),
            width=width,
            height=height,
            confidence=min(100.0, confidence),
        )

    @staticmethod
    def _validate(frame: Any) -> Optional[np.ndarray]:
        """Return the frame as an (H, W, C >= 3) array, or None."""
        if frame is None:
            return None
        array = np.asarray(frame)
        if array.ndim != 3 or array.shape[2] < 3 or array.shape[0] == 0 or array.shape[1] == 0:
            return None
        if not np.issubdtype(array.dtype, np.number):
            return None
        return array


def detect_motion(prev_frame: Any, curr_frame: Any, sensitivity: float) -> List[Target]:
    """
    Convenience wrapper using default detector settings.

    Args:
        prev_frame: Previous frame (H, W, C)
        curr_frame: Current frame (H, W, C)
        sensitivity: Detection sensitivity [0, 100]

    Returns:
        Targets sorted by confidence
    """
    return FrameMotionDetector().detect(prev_frame, curr_frame, sensitivity)
