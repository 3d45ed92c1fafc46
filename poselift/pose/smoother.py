"""
Temporal smoothing of decoded keypoints.

Keeps one bounded moving-average filter per joint and averages the most
recent observations with equal weights. Filters are indexed by joint
position; when the joint count of a frame differs from the filter bank's
size the whole bank is rebuilt and every joint's history is discarded.

Not thread-safe. Frames must be observed one at a time, in arrival order.
"""
import logging
from collections import deque
from typing import List, Optional, Sequence

from .keypoint import PredictedPoint
from ..config import SMOOTHING_WINDOW_SIZE, validate_window_size

logger = logging.getLogger(__name__)


class MovingAverageFilter:
    """
    Equal-weight average over the last `limit` points of one joint.

    The average is recomputed on every insertion so reads are free.
    """

    def __init__(self, limit: int = SMOOTHING_WINDOW_SIZE):
        self.limit = validate_window_size(limit)
        self._buffer: deque = deque(maxlen=self.limit)
        self._average: Optional[PredictedPoint] = None

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def average(self) -> Optional[PredictedPoint]:
        """Mean of the buffered points, or None before the first insertion."""
        return self._average

    def add(self, point: PredictedPoint) -> PredictedPoint:
        """Push a point (evicting the oldest when full) and return the new average."""
        self._buffer.append(point)

        n = len(self._buffer)
        self._average = PredictedPoint(
            x=sum(p.x for p in self._buffer) / n,
            y=sum(p.y for p in self._buffer) / n,
            confidence=sum(p.confidence for p in self._buffer) / n,
            joint_index=point.joint_index,
            label=point.label
        )
        return self._average

    def clear(self) -> None:
        self._buffer.clear()
        self._average = None


class TemporalSmoother:
    """
    Bank of per-joint moving-average filters for one video session.

    Absent joints (None inputs) are not inserted: the joint's previous
    average is emitted again, or None if it has no history yet.
    """

    def __init__(self, window_size: int = SMOOTHING_WINDOW_SIZE):
        """
        Initialize smoother.

        Args:
            window_size: Number of frames to average per joint (>= 1)

        Raises:
            ConfigurationError: If window_size is not a positive integer
        """
        self.window_size = validate_window_size(window_size)
        self._filters: List[MovingAverageFilter] = []
        self.rebuild_count = 0

    @property
    def joint_count(self) -> int:
        """Size of the current filter bank (0 before the first frame)."""
        return len(self._filters)

    def observe(self, points: Sequence[Optional[PredictedPoint]]) -> List[Optional[PredictedPoint]]:
        """
        Feed one frame of keypoints and get the smoothed keypoints back.

        Args:
            points: One entry per joint, None for joints without an estimate

        Returns:
            Smoothed points in the same joint order
        """
        if len(points) != len(self._filters):
            self._rebuild(len(points))

        smoothed: List[Optional[PredictedPoint]] = []
        for point, joint_filter in zip(points, self._filters):
            if point is None:
                smoothed.append(joint_filter.average)
            else:
                smoothed.append(joint_filter.add(point))
        return smoothed

    def reset(self) -> None:
        """Drop all filters and the rebuild count; the next frame starts a fresh bank."""
        self._filters = []
        self.rebuild_count = 0

    def _rebuild(self, joint_count: int) -> None:
        if self._filters:
            logger.info(
                "Joint count changed from %d to %d; discarding smoothing history",
                len(self._filters), joint_count
            )
        else:
            logger.debug("Creating filter bank for %d joints", joint_count)
        self._filters = [MovingAverageFilter(self.window_size) for _ in range(joint_count)]
        self.rebuild_count += 1
