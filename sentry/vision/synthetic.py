"""
Synthetic Frame Source

Generates RGBA frames with bright moving blobs over a static background, so
the motion pipeline can run without camera hardware (headless runs, tests).
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np


@dataclass
class Blob:
    """Square moving patch [px]."""

    x: float
    y: float
    vx: float
    vy: float
    size: int


class SyntheticFrameSource:
    """
    Moving-blob frame generator.

    Blobs bounce off the frame edges. Optional sensor noise is added per
    frame; with noise_level = 0 two frames differ only where blobs moved.

    Example:
        >>> source = SyntheticFrameSource(width=320, height=240, n_blobs=2, seed=7)
        >>> prev, curr = source.next_frame(), source.next_frame()
    """

    def __init__(
        self,
        width: int = 320,
        height: int = 240,
        n_blobs: int = 2,
        blob_size: int = 24,
        max_speed_px: float = 12.0,
        noise_level: float = 0.0,
        background: int = 24,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Args:
            width, height: Frame size [px]
            n_blobs: Number of moving blobs
            blob_size: Blob edge length [px]
            max_speed_px: Maximum blob speed per frame [px]
            noise_level: Std of additive Gaussian sensor noise [intensity]
            background: Background grey level
            seed: Seed for a private generator (ignored when rng is given)
            rng: Shared random generator
        """
        self.width = width
        self.height = height
        self.blob_size = blob_size
        self.noise_level = noise_level
        self.background = background
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.blobs: List[Blob] = [self._spawn_blob(max_speed_px) for _ in range(n_blobs)]
        self.frame_count = 0

    def _spawn_blob(self, max_speed_px: float) -> Blob:
        speed = self.rng.uniform(max_speed_px * 0.5, max_speed_px)
        heading = self.rng.uniform(0, 2 * np.pi)
        return Blob(
            x=self.rng.uniform(0, max(1, self.width - self.blob_size)),
            y=self.rng.uniform(0, max(1, self.height - self.blob_size)),
            vx=speed * np.cos(heading),
            vy=speed * np.sin(heading),
            size=self.blob_size,
        )

    def _move(self, blob: Blob) -> None:
        blob.x += blob.vx
        blob.y += blob.vy

        max_x = self.width - blob.size
        max_y = self.height - blob.size
        if blob.x < 0 or blob.x > max_x:
            blob.vx = -blob.vx
            blob.x = min(max(blob.x, 0), max_x)
        if blob.y < 0 or blob.y > max_y:
            blob.vy = -blob.vy
            blob.y = min(max(blob.y, 0), max_y)

    def render(self) -> np.ndarray:
        """Draw the current blob positions without advancing them."""
        frame = np.full((self.height, self.width, 4), self.background, dtype=np.float64)
        frame[..., 3] = 255

        for blob in self.blobs:
            x0, y0 = int(blob.x), int(blob.y)
            frame[y0 : y0 + blob.size, x0 : x0 + blob.size, :3] = 230

        if self.noise_level > 0:
            frame[..., :3] += self.rng.normal(0, self.noise_level, (self.height, self.width, 3))

        return np.clip(frame, 0, 255).astype(np.uint8)

    def next_frame(self) -> np.ndarray:
        """Advance every blob by one frame and render."""
        if self.frame_count > 0:
            for blob in self.blobs:
                self._move(blob)
        self.frame_count += 1
        return self.render()
