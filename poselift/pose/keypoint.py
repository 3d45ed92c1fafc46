"""
Keypoint data structure shared by the decoder, smoother and renderers.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class PredictedPoint:
    """
    A single decoded joint position.

    Coordinates are normalized to [0, 1] over the heatmap's spatial extent
    (x left to right, y top to bottom). Confidence is the raw network
    activation at the winning heatmap cell; it is not a probability and has
    no fixed scale.

    Absent joints are never represented by a PredictedPoint. Sequences of
    points use None for joints with no estimate.
    """
    x: float                      # Normalized x (0-1, left to right)
    y: float                      # Normalized y (0-1, top to bottom)
    confidence: float             # Raw heatmap value at the maximum
    joint_index: int              # Position in the network's joint order
    label: Optional[str] = None   # Joint name, presentation only

    @property
    def max_point(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict:
        """Convert point to dictionary for serialization."""
        return {
            "joint_index": self.joint_index,
            "label": self.label,
            "x": self.x,
            "y": self.y,
            "confidence": self.confidence,
        }
