"""
Video module for PoseLift.

Provides frame loading and skeleton overlays.
"""
from .loader import VideoLoader, VideoMetadata
from .overlay import SkeletonRenderer, OverlayConfig, blank_canvas, write_overlay_video

__all__ = [
    'VideoLoader',
    'VideoMetadata',
    'SkeletonRenderer',
    'OverlayConfig',
    'blank_canvas',
    'write_overlay_video'
]
