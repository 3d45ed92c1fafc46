"""
Central configuration for PoseLift.

All tunable parameters are defined here so the decoder, smoother, pipeline
and presentation helpers share the same defaults.

Configuration Categories:
-------------------------
1. PATH CONFIGURATION - Output locations for the CLI
2. HEATMAP DECODING - Tensor layout expected from the network
3. TEMPORAL SMOOTHING - Moving-average window
4. JOINT SCHEME - Joint labels and skeleton connections
5. PRESENTATION - Table formatting and overlay drawing
6. SYNTHETIC DEMO - Parameters for generated heatmaps

Tuning Guidelines:
------------------
- Larger SMOOTHING_WINDOW_SIZE = steadier keypoints, more lag behind motion
- SMOOTHING_WINDOW_SIZE = 1 disables smoothing (output equals input)
- Confidence values are raw network activations; there is no universal
  threshold, calibrate OVERLAY_MIN_CONFIDENCE against your model
"""
import numbers
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import ConfigurationError

# ============================================================================
# PATH CONFIGURATION
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
DEFAULT_OVERLAY_PATH = OUTPUTS_DIR / "overlay.mp4"

# ============================================================================
# HEATMAP DECODING
# ============================================================================

# channels_first: [joints, height, width]
# channels_last:  [height, width, joints]
HEATMAP_LAYOUTS = ("channels_first", "channels_last")
HEATMAP_LAYOUT = "channels_first"

# Mirror x for front-facing cameras
FLIP_HORIZONTAL = False

# ============================================================================
# TEMPORAL SMOOTHING
# ============================================================================

SMOOTHING_WINDOW_SIZE = 3  # Frames averaged per joint (~0.1 sec at 30fps)

# ============================================================================
# JOINT SCHEME
# ============================================================================

# Output order of the 14-joint CPM / hourglass models
JOINT_LABELS = [
    "top",
    "neck",
    "right_shoulder",
    "right_elbow",
    "right_wrist",
    "left_shoulder",
    "left_elbow",
    "left_wrist",
    "right_hip",
    "right_knee",
    "right_ankle",
    "left_hip",
    "left_knee",
    "left_ankle",
]

SKELETON_CONNECTIONS = [
    ("top", "neck"),
    ("neck", "right_shoulder"),
    ("right_shoulder", "right_elbow"),
    ("right_elbow", "right_wrist"),
    ("neck", "left_shoulder"),
    ("left_shoulder", "left_elbow"),
    ("left_elbow", "left_wrist"),
    ("neck", "right_hip"),
    ("right_hip", "right_knee"),
    ("right_knee", "right_ankle"),
    ("neck", "left_hip"),
    ("left_hip", "left_knee"),
    ("left_knee", "left_ankle"),
]

# ============================================================================
# PRESENTATION
# ============================================================================

TABLE_DECIMALS = 3          # Digits shown for coordinates and confidence
TABLE_ABSENT_MARK = "-"     # Cell text for joints with no keypoint

# BGR format for OpenCV
OVERLAY_POINT_COLOR = (0, 255, 0)
OVERLAY_LINE_COLOR = (255, 255, 255)
OVERLAY_LABEL_COLOR = (200, 200, 200)
OVERLAY_POINT_RADIUS = 5
OVERLAY_LINE_THICKNESS = 2
OVERLAY_MIN_CONFIDENCE = None  # None draws every decoded joint

# ============================================================================
# SYNTHETIC DEMO
# ============================================================================

SYNTHETIC_HEATMAP_SIZE = (96, 96)  # (height, width) of CPM output maps
SYNTHETIC_FRAME_COUNT = 90         # 3 seconds at 30fps
SYNTHETIC_FPS = 30.0
SYNTHETIC_SIGMA = 2.0              # Gaussian blob radius in heatmap cells
SYNTHETIC_NOISE = 0.05             # Std of additive noise
SYNTHETIC_SEED = 7

# Timing recorder history (frames)
TIMING_HISTORY = 30


@dataclass
class PipelineConfig:
    """
    Settings for one PosePipeline session.

    Changing any of these mid-session would invalidate buffered history,
    so a pipeline validates them once at construction.
    """
    window_size: int = SMOOTHING_WINDOW_SIZE
    layout: str = HEATMAP_LAYOUT
    flip_horizontal: bool = FLIP_HORIZONTAL
    joint_labels: Optional[List[str]] = field(default_factory=lambda: list(JOINT_LABELS))

    def validate(self) -> "PipelineConfig":
        """Raise ConfigurationError for unusable settings, else return self."""
        validate_window_size(self.window_size)
        validate_layout(self.layout)
        if isinstance(self.joint_labels, str):
            raise ConfigurationError("joint_labels must be a list of strings, not a single string")
        if self.joint_labels is not None:
            if not all(isinstance(label, str) for label in self.joint_labels):
                raise ConfigurationError("joint_labels must be a list of strings")
        return self


def validate_window_size(window_size) -> int:
    """Check a smoothing window is an integer >= 1."""
    if isinstance(window_size, bool) or not isinstance(window_size, numbers.Integral):
        raise ConfigurationError(
            f"window_size must be an integer, got {type(window_size).__name__}"
        )
    if window_size < 1:
        raise ConfigurationError(f"window_size must be >= 1, got {window_size}")
    return int(window_size)


def validate_layout(layout: str) -> str:
    """Check a heatmap layout name is one of HEATMAP_LAYOUTS."""
    if layout not in HEATMAP_LAYOUTS:
        raise ConfigurationError(
            f"Unknown heatmap layout '{layout}', expected one of {HEATMAP_LAYOUTS}"
        )
    return layout
