"""
Pose post-processing for PoseLift.

Turns network heatmaps into keypoints (HeatmapDecoder) and steadies them
across frames (TemporalSmoother).
"""
from .keypoint import PredictedPoint
from .heatmap_decoder import HeatmapDecoder
from .smoother import MovingAverageFilter, TemporalSmoother

__all__ = [
    'PredictedPoint',
    'HeatmapDecoder',
    'MovingAverageFilter',
    'TemporalSmoother'
]
