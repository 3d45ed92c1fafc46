"""
Output module for PoseLift.

Formats smoothed keypoints for tabular display.
"""
from .table import format_keypoint_rows, keypoints_to_dataframe, render_table

__all__ = [
    'format_keypoint_rows',
    'keypoints_to_dataframe',
    'render_table'
]
