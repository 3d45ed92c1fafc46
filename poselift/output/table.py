"""
Keypoint table formatting for PoseLift.

Builds the per-joint coordinate table shown next to the skeleton view.
Formatting lives here so the decoder and smoother only deal in floats.
"""
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..pose.keypoint import PredictedPoint
from ..config import TABLE_DECIMALS, TABLE_ABSENT_MARK

TABLE_COLUMNS = ["joint", "x", "y", "confidence"]


def _joint_name(index: int, point: Optional[PredictedPoint], labels: Optional[Sequence[str]]) -> str:
    """Label from the injected table, then from the point, then the index."""
    if labels is not None and index < len(labels):
        return labels[index]
    if point is not None and point.label:
        return point.label
    return f"joint_{index}"


def format_keypoint_rows(
    points: Sequence[Optional[PredictedPoint]],
    labels: Optional[Sequence[str]] = None,
    decimals: int = TABLE_DECIMALS
) -> List[Dict[str, str]]:
    """
    Format keypoints as display strings.

    Args:
        points: Keypoints in joint order, None for absent joints
        labels: Optional joint names overriding the points' own labels
        decimals: Digits after the decimal point

    Returns:
        One dict per joint with "joint", "x", "y" and "confidence" strings
    """
    rows = []
    for index, point in enumerate(points):
        name = _joint_name(index, point, labels)
        if point is None:
            rows.append({
                "joint": name,
                "x": TABLE_ABSENT_MARK,
                "y": TABLE_ABSENT_MARK,
                "confidence": TABLE_ABSENT_MARK
            })
            continue
        rows.append({
            "joint": name,
            "x": f"{point.x:.{decimals}f}",
            "y": f"{point.y:.{decimals}f}",
            "confidence": f"{point.confidence:.{decimals}f}"
        })
    return rows


def keypoints_to_dataframe(
    points: Sequence[Optional[PredictedPoint]],
    labels: Optional[Sequence[str]] = None
) -> pd.DataFrame:
    """
    Build a DataFrame of keypoints, NaN for absent joints.

    Args:
        points: Keypoints in joint order
        labels: Optional joint names

    Returns:
        DataFrame with columns joint, x, y, confidence
    """
    records = []
    for index, point in enumerate(points):
        records.append({
            "joint": _joint_name(index, point, labels),
            "x": point.x if point is not None else np.nan,
            "y": point.y if point is not None else np.nan,
            "confidence": point.confidence if point is not None else np.nan
        })
    return pd.DataFrame(records, columns=TABLE_COLUMNS)


def render_table(
    points: Sequence[Optional[PredictedPoint]],
    labels: Optional[Sequence[str]] = None,
    decimals: int = TABLE_DECIMALS
) -> str:
    """Plain-text table for terminal output."""
    df = pd.DataFrame(format_keypoint_rows(points, labels, decimals), columns=TABLE_COLUMNS)
    return df.to_string(index=False)
