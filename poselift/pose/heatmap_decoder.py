"""
Heatmap decoding for PoseLift.

Converts the per-joint confidence heatmaps emitted by a pose network into
one normalized keypoint per joint. The decoder is a pure function of the
tensor: no state is kept between frames.

Coordinate convention:
----------------------
The winning cell (row, col) maps to

    x = col / (width - 1)
    y = row / (height - 1)

so the corner cells land exactly on 0.0 and 1.0. An axis of length 1 maps
to 0.5. Renderers scale these by the frame size.
"""
import logging
from typing import List, Optional, Sequence

import numpy as np

from .keypoint import PredictedPoint
from ..errors import DecodeError
from ..config import HEATMAP_LAYOUT, FLIP_HORIZONTAL, validate_layout

logger = logging.getLogger(__name__)


class HeatmapDecoder:
    """
    Argmax decoder for multi-joint heatmaps.

    For every joint slice the cell with the highest value wins. Ties resolve
    to the first cell in row-major order (lowest row, then lowest column),
    which is what numpy.argmax returns on a C-ordered flattened slice.
    A slice whose values are all equal has no maximum and yields None.
    """

    def __init__(
        self,
        layout: str = HEATMAP_LAYOUT,
        joint_labels: Optional[Sequence[str]] = None,
        flip_horizontal: bool = FLIP_HORIZONTAL
    ):
        """
        Initialize decoder.

        Args:
            layout: "channels_first" ([joints, H, W]) or "channels_last" ([H, W, joints])
            joint_labels: Optional joint names attached to decoded points
            flip_horizontal: Mirror x coordinates (front-facing camera)
        """
        self.layout = validate_layout(layout)
        self.joint_labels = list(joint_labels) if joint_labels is not None else None
        self.flip_horizontal = flip_horizontal

    def convert(self, heatmap) -> List[Optional[PredictedPoint]]:
        """
        Decode one frame's heatmap tensor.

        Args:
            heatmap: 3-D array of confidence values in the configured layout

        Returns:
            One PredictedPoint (or None when the slice is degenerate) per
            joint, in joint-index order

        Raises:
            DecodeError: If the tensor has the wrong rank, an empty
                dimension, a non-numeric dtype or non-finite values
        """
        maps = self._validate(heatmap)
        n_joints, height, width = maps.shape

        # Row-major flattening keeps argmax tie-breaking at (lowest row, lowest col)
        flat = maps.reshape(n_joints, height * width)
        best = np.argmax(flat, axis=1)
        peaks = flat[np.arange(n_joints), best]
        degenerate = peaks == np.min(flat, axis=1)

        points: List[Optional[PredictedPoint]] = []
        for joint_index in range(n_joints):
            if degenerate[joint_index]:
                logger.debug("Joint %d heatmap is flat; no keypoint", joint_index)
                points.append(None)
                continue

            row, col = divmod(int(best[joint_index]), width)
            x = _normalize(col, width)
            y = _normalize(row, height)
            if self.flip_horizontal:
                x = 1.0 - x

            points.append(PredictedPoint(
                x=x,
                y=y,
                confidence=float(peaks[joint_index]),
                joint_index=joint_index,
                label=self._label_for(joint_index)
            ))

        return points

    def _validate(self, heatmap) -> np.ndarray:
        """Return the tensor as a [joints, H, W] float array or raise DecodeError."""
        try:
            maps = np.asarray(heatmap)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Heatmap is not array-like: {e}") from e

        if maps.ndim != 3:
            raise DecodeError(f"Heatmap must be 3-D, got shape {maps.shape}")
        if not (np.issubdtype(maps.dtype, np.floating) or np.issubdtype(maps.dtype, np.integer)):
            raise DecodeError(f"Heatmap must be numeric, got dtype {maps.dtype}")

        if self.layout == "channels_last":
            maps = np.moveaxis(maps, -1, 0)

        if 0 in maps.shape:
            raise DecodeError(f"Heatmap has an empty dimension: {maps.shape}")

        maps = np.ascontiguousarray(maps, dtype=np.float64)
        if not np.all(np.isfinite(maps)):
            raise DecodeError("Heatmap contains NaN or infinite values")

        return maps

    def _label_for(self, joint_index: int) -> Optional[str]:
        if self.joint_labels is None or joint_index >= len(self.joint_labels):
            return None
        return self.joint_labels[joint_index]


def _normalize(index: int, size: int) -> float:
    """Map a cell index onto [0, 1]; a single-cell axis maps to its centre."""
    if size == 1:
        return 0.5
    return index / (size - 1)
