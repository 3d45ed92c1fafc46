import math

from poselift.output.table import format_keypoint_rows, keypoints_to_dataframe, render_table

from conftest import make_point


def test_rows_use_three_decimals():
    rows = format_keypoint_rows([make_point(0.12345, 0.5, confidence=0.98765)], labels=["top"])
    assert rows == [{"joint": "top", "x": "0.123", "y": "0.500", "confidence": "0.988"}]


def test_absent_joint_row():
    rows = format_keypoint_rows([None], labels=["neck"])
    assert rows[0] == {"joint": "neck", "x": "-", "y": "-", "confidence": "-"}


def test_label_fallbacks():
    rows = format_keypoint_rows([make_point(0.1, label="wrist"), None])
    assert rows[0]["joint"] == "wrist"
    assert rows[1]["joint"] == "joint_1"


def test_dataframe_has_nan_for_absent_joints():
    df = keypoints_to_dataframe([make_point(0.25, 0.75, confidence=2.0), None], labels=["a", "b"])
    assert list(df.columns) == ["joint", "x", "y", "confidence"]
    assert df.loc[0, "confidence"] == 2.0
    assert math.isnan(df.loc[1, "x"])


def test_render_table_text():
    text = render_table([make_point(0.5)], labels=["top"])
    assert "top" in text
    assert "0.500" in text
