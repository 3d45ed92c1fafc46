"""
Video loading utilities for PoseLift.
"""
import cv2
import numpy as np
from pathlib import Path
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple


@dataclass
class VideoMetadata:
    """Metadata extracted from a video file."""
    path: Path
    fps: float
    frame_count: int
    duration: float  # seconds
    width: int
    height: int


class VideoLoader:
    """Reads frames from a recorded or imported clip."""

    def __init__(self, video_path):
        """
        Initialize video loader.

        Args:
            video_path: Path to the video file
        """
        self.path = Path(video_path)
        if not self.path.exists():
            raise FileNotFoundError(f"Video file not found: {self.path}")

        self._cap: Optional[cv2.VideoCapture] = None
        self._metadata: Optional[VideoMetadata] = None

    @property
    def metadata(self) -> VideoMetadata:
        """Get video metadata, loading it if necessary."""
        if self._metadata is None:
            self._metadata = self._load_metadata()
        return self._metadata

    def _load_metadata(self) -> VideoMetadata:
        """Load metadata from video file."""
        cap = cv2.VideoCapture(str(self.path))
        if not cap.isOpened():
            raise ValueError(f"Could not open video file: {self.path}")

        try:
            fps = cap.get(cv2.CAP_PROP_FPS)
            frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
            return VideoMetadata(
                path=self.path,
                fps=fps,
                frame_count=frame_count,
                duration=frame_count / fps if fps > 0 else 0.0,
                width=int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
                height=int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
            )
        finally:
            cap.release()

    def open(self) -> None:
        """Open video capture."""
        if self._cap is not None:
            self._cap.release()
        self._cap = cv2.VideoCapture(str(self.path))
        if not self._cap.isOpened():
            raise ValueError(f"Could not open video file: {self.path}")

    def close(self) -> None:
        """Close video capture."""
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    def __enter__(self) -> "VideoLoader":
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def frames(self, max_frames: Optional[int] = None) -> Iterator[Tuple[int, np.ndarray]]:
        """
        Iterate through frames in order.

        Args:
            max_frames: Stop after this many frames, None for all

        Yields:
            Tuple of (frame_number, frame_data)
        """
        if self._cap is None:
            raise RuntimeError("Video not opened. Call open() or use context manager.")

        frame_num = 0
        while max_frames is None or frame_num < max_frames:
            ret, frame = self._cap.read()
            if not ret:
                break
            yield frame_num, frame
            frame_num += 1
