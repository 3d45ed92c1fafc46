"""
Skeleton overlay drawing for PoseLift.

Draws smoothed keypoints and the joint connections between them onto
video frames, scaling normalized coordinates by the frame size.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..pose.keypoint import PredictedPoint
from ..config import (
    SKELETON_CONNECTIONS,
    OVERLAY_POINT_COLOR,
    OVERLAY_LINE_COLOR,
    OVERLAY_LABEL_COLOR,
    OVERLAY_POINT_RADIUS,
    OVERLAY_LINE_THICKNESS,
    OVERLAY_MIN_CONFIDENCE
)


@dataclass
class OverlayConfig:
    """Configuration for skeleton overlays."""
    show_points: bool = True
    show_connections: bool = True
    show_labels: bool = False
    show_frame_number: bool = True
    point_radius: int = OVERLAY_POINT_RADIUS
    line_thickness: int = OVERLAY_LINE_THICKNESS
    label_font_scale: float = 0.4
    min_confidence: Optional[float] = OVERLAY_MIN_CONFIDENCE  # None draws all joints


class SkeletonRenderer:
    """
    Draws keypoints onto BGR frames.

    Connections are looked up by joint label, so the renderer works with any
    joint scheme whose labels appear in `connections`.
    """

    def __init__(
        self,
        connections: Optional[Sequence[Tuple[str, str]]] = None,
        config: Optional[OverlayConfig] = None
    ):
        self.connections = list(connections) if connections is not None else list(SKELETON_CONNECTIONS)
        self.config = config or OverlayConfig()

    def draw(
        self,
        frame: np.ndarray,
        points: Sequence[Optional[PredictedPoint]],
        frame_number: Optional[int] = None
    ) -> np.ndarray:
        """
        Return a copy of the frame with the skeleton drawn on it.

        Args:
            frame: BGR image (H, W, 3)
            points: Keypoints in joint order, None for absent joints
            frame_number: Drawn at the bottom left when given

        Returns:
            Annotated copy of the frame
        """
        annotated = frame.copy()
        height, width = annotated.shape[:2]
        visible = self._visible_points(points)

        if self.config.show_connections:
            for start_name, end_name in self.connections:
                if start_name in visible and end_name in visible:
                    pt1 = self._to_pixel(visible[start_name], width, height)
                    pt2 = self._to_pixel(visible[end_name], width, height)
                    cv2.line(annotated, pt1, pt2, OVERLAY_LINE_COLOR,
                             self.config.line_thickness)

        for name, point in visible.items():
            center = self._to_pixel(point, width, height)
            if self.config.show_points:
                cv2.circle(annotated, center, self.config.point_radius,
                           OVERLAY_POINT_COLOR, -1)
            if self.config.show_labels:
                cv2.putText(annotated, name,
                            (center[0] + self.config.point_radius + 2, center[1]),
                            cv2.FONT_HERSHEY_SIMPLEX, self.config.label_font_scale,
                            OVERLAY_LABEL_COLOR, 1)

        if self.config.show_frame_number and frame_number is not None:
            cv2.putText(annotated, f"Frame: {frame_number}", (10, height - 10),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, OVERLAY_LABEL_COLOR, 1)

        return annotated

    def _visible_points(self, points: Sequence[Optional[PredictedPoint]]) -> Dict[str, PredictedPoint]:
        """Points that pass the confidence filter, keyed by label."""
        visible = {}
        for index, point in enumerate(points):
            if point is None:
                continue
            if self.config.min_confidence is not None and point.confidence < self.config.min_confidence:
                continue
            visible[point.label or f"joint_{index}"] = point
        return visible

    @staticmethod
    def _to_pixel(point: PredictedPoint, width: int, height: int) -> Tuple[int, int]:
        x = int(round(point.x * (width - 1)))
        y = int(round(point.y * (height - 1)))
        return (x, y)


def blank_canvas(width: int, height: int) -> np.ndarray:
    """Black BGR frame for drawing keypoints without a source video."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def write_overlay_video(
    output_path,
    frames: List[np.ndarray],
    fps: float
) -> int:
    """
    Write annotated frames to an mp4 file.

    Returns:
        Number of frames written
    """
    if not frames:
        return 0
    height, width = frames[0].shape[:2]
    fourcc = cv2.VideoWriter_fourcc(*'mp4v')
    out = cv2.VideoWriter(str(output_path), fourcc, fps, (width, height))
    try:
        for frame in frames:
            out.write(frame)
    finally:
        out.release()
    return len(frames)
