"""
PoseLift - Main Pipeline

Replays a stack of network heatmaps through the decode and smoothing
pipeline, optionally drawing the smoothed skeleton over the source video.
"""
import logging
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from .config import (
    PipelineConfig,
    SYNTHETIC_FPS,
    SYNTHETIC_FRAME_COUNT
)
from .pipeline import PosePipeline, TimingRecorder
from .synthetic import SyntheticHeatmapGenerator
from .video.loader import VideoLoader
from .video.overlay import SkeletonRenderer, blank_canvas, write_overlay_video

logger = logging.getLogger(__name__)

HEATMAP_NPZ_KEY = "heatmaps"
CANVAS_SIZE = (480, 640)  # (height, width) when no video is given


def load_heatmaps(path: Path) -> np.ndarray:
    """
    Load a heatmap stack shaped (frames, ...) from .npy or .npz.

    For .npz files the "heatmaps" array is used, else the first array.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Heatmap file not found: {path}")

    if path.suffix == ".npz":
        with np.load(path) as data:
            if not data.files:
                raise ValueError(f"No arrays in heatmap file: {path}")
            key = HEATMAP_NPZ_KEY if HEATMAP_NPZ_KEY in data.files else data.files[0]
            heatmaps = data[key]
    else:
        heatmaps = np.load(path)

    if heatmaps.ndim != 4:
        raise ValueError(f"Expected a (frames, ...) stack of 3-D heatmaps, got shape {heatmaps.shape}")
    return heatmaps


def run_pipeline(
    heatmaps_path: Optional[Path] = None,
    video_path: Optional[Path] = None,
    output_path: Optional[Path] = None,
    config: Optional[PipelineConfig] = None,
    progress_callback: Optional[Callable[[float, str], None]] = None
) -> dict:
    """
    Execute the keypoint pipeline over a whole clip.

    Args:
        heatmaps_path: .npy/.npz heatmap stack, None to synthesize one
        video_path: Source video to draw on, frames paired with heatmaps in order
        output_path: Where to write the annotated mp4, None to skip rendering
        config: Pipeline settings
        progress_callback: Optional callback(progress, message) for UI updates

    Returns:
        Dict containing per-frame results and summary statistics
    """
    def update_progress(progress: float, message: str):
        if progress_callback:
            progress_callback(progress, message)

    update_progress(0.0, "Loading heatmaps...")
    fps = SYNTHETIC_FPS
    if heatmaps_path is None:
        heatmaps = SyntheticHeatmapGenerator().generate(SYNTHETIC_FRAME_COUNT)
        source = "synthetic"
    else:
        heatmaps = load_heatmaps(heatmaps_path)
        source = str(heatmaps_path)
    logger.info("Loaded %d heatmap frames from %s", len(heatmaps), source)

    recorder = TimingRecorder()
    pipeline = PosePipeline(config, timing_observer=recorder)
    results = pipeline.process_sequence(
        heatmaps,
        progress_callback=lambda p, m: update_progress(0.05 + p * 0.75, m)
    )

    written = 0
    if output_path is not None:
        update_progress(0.80, "Rendering overlay...")
        renderer = SkeletonRenderer()
        frames = []
        if video_path is not None:
            loader = VideoLoader(video_path)
            fps = loader.metadata.fps or fps
            with loader:
                for frame_number, frame in loader.frames(max_frames=len(results)):
                    frames.append(renderer.draw(frame, results[frame_number].points, frame_number))
        else:
            height, width = CANVAS_SIZE
            for result in results:
                frames.append(renderer.draw(blank_canvas(width, height), result.points, result.frame_number))

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        written = write_overlay_video(output_path, frames, fps)

    update_progress(1.0, "Complete")

    last_good = next((r for r in reversed(results) if r.ok), None)
    return {
        "source": source,
        "results": results,
        "final_points": last_good.points if last_good else [],
        "frames": pipeline.frame_count,
        "dropped_frames": pipeline.dropped_frames,
        "filter_rebuilds": pipeline.smoother.rebuild_count,
        "timing": recorder.summary(),
        "output_path": Path(output_path) if written else None,
        "frames_written": written,
        "joint_labels": pipeline.config.joint_labels
    }
