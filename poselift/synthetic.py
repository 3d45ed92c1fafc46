"""
Synthetic heatmap generator for PoseLift demos and tests.

Produces network-like heatmaps for a 14-joint figure doing squats, so the
decode and smoothing pipeline can be exercised without a pose model.
"""
import math
from typing import Optional, Tuple

import numpy as np

from .config import (
    SYNTHETIC_HEATMAP_SIZE,
    SYNTHETIC_FRAME_COUNT,
    SYNTHETIC_FPS,
    SYNTHETIC_SIGMA,
    SYNTHETIC_NOISE,
    SYNTHETIC_SEED
)

# Standing pose in normalized (x, y), ordered like config.JOINT_LABELS
STANDING_POSE = np.array([
    [0.50, 0.10],  # top
    [0.50, 0.22],  # neck
    [0.40, 0.25],  # right_shoulder
    [0.36, 0.38],  # right_elbow
    [0.34, 0.50],  # right_wrist
    [0.60, 0.25],  # left_shoulder
    [0.64, 0.38],  # left_elbow
    [0.66, 0.50],  # left_wrist
    [0.44, 0.52],  # right_hip
    [0.44, 0.70],  # right_knee
    [0.44, 0.88],  # right_ankle
    [0.56, 0.52],  # left_hip
    [0.56, 0.70],  # left_knee
    [0.56, 0.88],  # left_ankle
])

# Vertical travel of each joint at the bottom of a squat (ankles stay put)
SQUAT_DEPTH = np.array([0.18, 0.18, 0.18, 0.18, 0.18, 0.18, 0.18, 0.18,
                        0.16, 0.06, 0.0, 0.16, 0.06, 0.0])


class SyntheticHeatmapGenerator:
    """Generates gaussian-blob heatmaps following a squat motion."""

    def __init__(
        self,
        heatmap_size: Tuple[int, int] = SYNTHETIC_HEATMAP_SIZE,
        sigma: float = SYNTHETIC_SIGMA,
        noise: float = SYNTHETIC_NOISE,
        fps: float = SYNTHETIC_FPS,
        seed: Optional[int] = SYNTHETIC_SEED
    ):
        """
        Initialize generator.

        Args:
            heatmap_size: (height, width) of each joint map
            sigma: Gaussian radius in heatmap cells
            noise: Standard deviation of additive gaussian noise
            fps: Frame rate used to time the squat cycle
            seed: Random seed, None for nondeterministic noise
        """
        self.height, self.width = heatmap_size
        self.sigma = sigma
        self.noise = noise
        self.fps = fps
        self.rng = np.random.default_rng(seed)

        ys, xs = np.mgrid[0:self.height, 0:self.width]
        self._grid_x = xs.astype(np.float32)
        self._grid_y = ys.astype(np.float32)

    @property
    def joint_count(self) -> int:
        return len(STANDING_POSE)

    def pose_at(self, frame_number: int, period: float = 2.0) -> np.ndarray:
        """
        Ground-truth joint positions for a frame.

        Args:
            frame_number: Frame index
            period: Seconds per squat repetition

        Returns:
            Array (joints, 2) of normalized (x, y)
        """
        t = frame_number / self.fps
        depth = 0.5 * (1.0 - math.cos(2.0 * math.pi * t / period))
        pose = STANDING_POSE.copy()
        pose[:, 1] += SQUAT_DEPTH * depth
        return pose

    def heatmap_for_pose(self, pose: np.ndarray) -> np.ndarray:
        """Render one [joints, H, W] heatmap with a blob at each joint."""
        maps = np.empty((len(pose), self.height, self.width), dtype=np.float32)
        for j, (x, y) in enumerate(pose):
            cx = x * (self.width - 1)
            cy = y * (self.height - 1)
            d2 = (self._grid_x - cx) ** 2 + (self._grid_y - cy) ** 2
            maps[j] = np.exp(-d2 / (2.0 * self.sigma ** 2))

        if self.noise > 0:
            maps += self.rng.normal(0.0, self.noise, size=maps.shape).astype(np.float32)
        return maps

    def generate(self, frame_count: int = SYNTHETIC_FRAME_COUNT) -> np.ndarray:
        """
        Generate a heatmap sequence.

        Returns:
            Array (frames, joints, H, W)
        """
        return np.stack([
            self.heatmap_for_pose(self.pose_at(i)) for i in range(frame_count)
        ], axis=0)
