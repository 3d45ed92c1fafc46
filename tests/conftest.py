import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from poselift.pose.keypoint import PredictedPoint


def make_point(x, y=0.0, confidence=1.0, joint_index=0, label=None):
    return PredictedPoint(x=x, y=y, confidence=confidence, joint_index=joint_index, label=label)


@pytest.fixture
def peak_heatmap():
    """Two 4x5 joint maps with single peaks at (1, 2) and (3, 4)."""
    maps = np.zeros((2, 4, 5), dtype=np.float32)
    maps[0, 1, 2] = 0.9
    maps[1, 3, 4] = 0.4
    return maps
