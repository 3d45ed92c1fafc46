"""
Per-session keypoint pipeline for PoseLift.

Runs HeatmapDecoder -> TemporalSmoother once per inference result and
reports timings to an optional observer.

Frame Policy:
-------------
- A malformed heatmap (DecodeError) drops that frame: the result carries
  no points and the error message, and the smoother is left untouched so
  the next good frame continues from the existing history.
- A change in joint count rebuilds the smoother's filter bank. This is
  logged, not reported as an error.

The pipeline is synchronous and not thread-safe. The embedding
application must deliver frames in order from a single producer.
"""
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

import numpy as np

from .config import PipelineConfig, TIMING_HISTORY
from .errors import DecodeError
from .pose.heatmap_decoder import HeatmapDecoder
from .pose.keypoint import PredictedPoint
from .pose.smoother import TemporalSmoother

logger = logging.getLogger(__name__)


@dataclass
class FrameTiming:
    """Processing times for one frame, in seconds."""
    frame_number: int
    inference_time: Optional[float]  # Supplied by the caller, if measured
    decode_time: float
    smooth_time: float

    @property
    def total_time(self) -> float:
        """Inference (when known) plus post-processing time."""
        return (self.inference_time or 0.0) + self.decode_time + self.smooth_time


@dataclass
class PipelineResult:
    """Output of the pipeline for a single frame."""
    frame_number: int
    points: List[Optional[PredictedPoint]]                       # Smoothed
    raw_points: List[Optional[PredictedPoint]] = field(default_factory=list)
    error: Optional[str] = None                                  # Set when the frame was dropped
    timing: Optional[FrameTiming] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def detected_count(self) -> int:
        """Number of joints with a keypoint this frame."""
        return sum(1 for p in self.points if p is not None)


class PosePipeline:
    """
    Heatmap-to-keypoint pipeline for one video session.

    Example:
        pipeline = PosePipeline(PipelineConfig(window_size=3))
        for heatmap in network_outputs:
            result = pipeline.process(heatmap)
            renderer.draw(frame, result.points)
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        timing_observer: Optional[Callable[[FrameTiming], None]] = None
    ):
        """
        Initialize pipeline.

        Args:
            config: Session settings, defaults from poselift.config
            timing_observer: Optional callback receiving a FrameTiming after
                every processed frame

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = (config or PipelineConfig()).validate()
        self.decoder = HeatmapDecoder(
            layout=self.config.layout,
            joint_labels=self.config.joint_labels,
            flip_horizontal=self.config.flip_horizontal
        )
        self.smoother = TemporalSmoother(window_size=self.config.window_size)
        self.timing_observer = timing_observer

        self.frame_count = 0
        self.dropped_frames = 0

    def process(self, heatmap, inference_time: Optional[float] = None) -> PipelineResult:
        """
        Decode and smooth one frame.

        Args:
            heatmap: The network's heatmap tensor for this frame
            inference_time: Seconds the network took, forwarded to the observer

        Returns:
            PipelineResult; on a decode failure `points` is empty and
            `error` holds the reason
        """
        frame_number = self.frame_count
        self.frame_count += 1

        start = time.perf_counter()
        try:
            raw_points = self.decoder.convert(heatmap)
        except DecodeError as e:
            self.dropped_frames += 1
            logger.warning("Dropping frame %d: %s", frame_number, e)
            timing = FrameTiming(
                frame_number=frame_number,
                inference_time=inference_time,
                decode_time=time.perf_counter() - start,
                smooth_time=0.0
            )
            self._notify(timing)
            return PipelineResult(
                frame_number=frame_number,
                points=[],
                error=str(e),
                timing=timing
            )
        decoded = time.perf_counter()

        points = self.smoother.observe(raw_points)
        smoothed = time.perf_counter()

        timing = FrameTiming(
            frame_number=frame_number,
            inference_time=inference_time,
            decode_time=decoded - start,
            smooth_time=smoothed - decoded
        )
        self._notify(timing)

        return PipelineResult(
            frame_number=frame_number,
            points=points,
            raw_points=raw_points,
            timing=timing
        )

    def process_sequence(
        self,
        heatmaps: Iterable,
        progress_callback: Optional[Callable[[float, str], None]] = None
    ) -> List[PipelineResult]:
        """
        Process a stack of heatmaps in order.

        Args:
            heatmaps: Array shaped (T, ...) or any iterable of per-frame tensors
            progress_callback: Optional callback(progress, message) for UI updates

        Returns:
            List of PipelineResult, one per frame
        """
        if isinstance(heatmaps, np.ndarray):
            total = heatmaps.shape[0] if heatmaps.ndim > 0 else 0
        else:
            heatmaps = list(heatmaps)
            total = len(heatmaps)

        results = []
        for i, heatmap in enumerate(heatmaps):
            results.append(self.process(heatmap))
            if progress_callback and total:
                progress_callback((i + 1) / total, f"Processed frame {i + 1}/{total}")
        return results

    def reset(self) -> None:
        """Start a new session: clear smoothing history and counters."""
        self.smoother.reset()
        self.frame_count = 0
        self.dropped_frames = 0

    def _notify(self, timing: FrameTiming) -> None:
        if self.timing_observer is not None:
            self.timing_observer(timing)


class TimingRecorder:
    """
    Timing observer that keeps recent frames and reports latency and FPS.

    Pass an instance as PosePipeline(timing_observer=recorder).
    """

    def __init__(self, history: int = TIMING_HISTORY):
        self.history = history
        self._timings: deque = deque(maxlen=history)
        self._arrivals: deque = deque(maxlen=history)

    def __call__(self, timing: FrameTiming) -> None:
        self._timings.append(timing)
        self._arrivals.append(time.perf_counter())

    def __len__(self) -> int:
        return len(self._timings)

    def summary(self) -> dict:
        """
        Aggregate the recorded frames.

        Returns:
            Dict with mean decode/smooth/total latency in milliseconds,
            mean inference latency (None if never supplied) and the
            observed frame rate (None with fewer than two frames)
        """
        n = len(self._timings)
        if n == 0:
            return {
                "frames": 0,
                "decode_ms": None,
                "smooth_ms": None,
                "inference_ms": None,
                "total_ms": None,
                "fps": None
            }

        inference = [t.inference_time for t in self._timings if t.inference_time is not None]

        fps = None
        if n > 1:
            span = self._arrivals[-1] - self._arrivals[0]
            if span > 0:
                fps = (n - 1) / span

        return {
            "frames": n,
            "decode_ms": 1000.0 * float(np.mean([t.decode_time for t in self._timings])),
            "smooth_ms": 1000.0 * float(np.mean([t.smooth_time for t in self._timings])),
            "inference_ms": 1000.0 * float(np.mean(inference)) if inference else None,
            "total_ms": 1000.0 * float(np.mean([t.total_time for t in self._timings])),
            "fps": fps
        }
