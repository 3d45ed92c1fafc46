"""
PoseLift - heatmap-to-keypoint post-processing.

Decodes per-joint heatmaps from a pose network into normalized keypoints
and smooths them across video frames with per-joint moving averages.
"""
from .config import PipelineConfig
from .errors import PoseLiftError, DecodeError, ConfigurationError
from .pose import PredictedPoint, HeatmapDecoder, MovingAverageFilter, TemporalSmoother
from .pipeline import PosePipeline, PipelineResult, FrameTiming, TimingRecorder

__version__ = "0.1.0"

__all__ = [
    'PipelineConfig',
    'PoseLiftError',
    'DecodeError',
    'ConfigurationError',
    'PredictedPoint',
    'HeatmapDecoder',
    'MovingAverageFilter',
    'TemporalSmoother',
    'PosePipeline',
    'PipelineResult',
    'FrameTiming',
    'TimingRecorder'
]
