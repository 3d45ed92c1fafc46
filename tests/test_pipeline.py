import numpy as np
import pytest

from poselift.config import PipelineConfig, JOINT_LABELS
from poselift.errors import ConfigurationError
from poselift.pipeline import PosePipeline, TimingRecorder, FrameTiming


def heatmap_with_peaks(cells, shape=(4, 4)):
    maps = np.zeros((len(cells),) + shape)
    for j, (row, col) in enumerate(cells):
        maps[j, row, col] = 1.0
    return maps


def test_process_decodes_and_smooths():
    pipeline = PosePipeline(PipelineConfig(window_size=2, joint_labels=["a", "b"]))
    pipeline.process(heatmap_with_peaks([(0, 0), (3, 3)]))
    result = pipeline.process(heatmap_with_peaks([(0, 3), (3, 3)]))

    assert result.ok
    assert result.frame_number == 1
    assert result.raw_points[0].x == pytest.approx(1.0)
    assert result.points[0].x == pytest.approx(0.5)
    assert result.points[1].x == pytest.approx(1.0)
    assert result.points[0].label == "a"
    assert result.detected_count == 2


def test_default_labels_follow_joint_scheme():
    pipeline = PosePipeline()
    result = pipeline.process(heatmap_with_peaks([(1, 1)] * len(JOINT_LABELS)))
    assert [p.label for p in result.points] == JOINT_LABELS


def test_bad_frame_is_dropped_and_history_kept():
    pipeline = PosePipeline(PipelineConfig(window_size=3))
    pipeline.process(heatmap_with_peaks([(0, 0)]))

    bad = pipeline.process(np.full((1, 4, 4), np.nan))
    assert not bad.ok
    assert bad.points == []
    assert "NaN" in bad.error
    assert pipeline.dropped_frames == 1

    result = pipeline.process(heatmap_with_peaks([(0, 3)]))
    assert result.points[0].x == pytest.approx(0.5)
    assert pipeline.smoother.rebuild_count == 1


def test_timing_observer_called_for_every_frame():
    seen = []
    pipeline = PosePipeline(timing_observer=seen.append)
    pipeline.process(heatmap_with_peaks([(0, 0)]), inference_time=0.02)
    pipeline.process(np.zeros((2, 2)))

    assert [t.frame_number for t in seen] == [0, 1]
    assert seen[0].inference_time == pytest.approx(0.02)
    assert seen[0].total_time >= 0.02
    assert seen[1].smooth_time == 0.0


def test_process_sequence_reports_progress():
    progress = []
    pipeline = PosePipeline()
    stack = np.stack([heatmap_with_peaks([(0, i)]) for i in range(4)])
    results = pipeline.process_sequence(stack, progress_callback=lambda p, m: progress.append(p))

    assert len(results) == 4
    assert progress[-1] == pytest.approx(1.0)
    assert results[-1].points[0].x == pytest.approx((1 + 2 + 3) / 3 / 3)


def test_reset_clears_session():
    pipeline = PosePipeline()
    pipeline.process(heatmap_with_peaks([(0, 3)]))
    pipeline.process(np.zeros(3))
    pipeline.reset()

    assert pipeline.frame_count == 0
    assert pipeline.dropped_frames == 0
    assert pipeline.smoother.rebuild_count == 0
    result = pipeline.process(heatmap_with_peaks([(0, 0)]))
    assert result.frame_number == 0
    assert result.points[0].x == pytest.approx(0.0)


def test_invalid_config_is_fatal():
    with pytest.raises(ConfigurationError):
        PosePipeline(PipelineConfig(window_size=0))
    with pytest.raises(ConfigurationError):
        PosePipeline(PipelineConfig(layout="sideways"))
    with pytest.raises(ConfigurationError):
        PosePipeline(PipelineConfig(joint_labels=["head", 3]))
    with pytest.raises(ConfigurationError):
        PosePipeline(PipelineConfig(joint_labels="head"))


def test_timing_recorder_summary():
    recorder = TimingRecorder(history=2)
    assert recorder.summary()["frames"] == 0

    recorder(FrameTiming(0, None, 0.001, 0.001))
    recorder(FrameTiming(1, 0.010, 0.003, 0.001))
    recorder(FrameTiming(2, None, 0.003, 0.001))

    summary = recorder.summary()
    assert len(recorder) == 2
    assert summary["frames"] == 2
    assert summary["decode_ms"] == pytest.approx(3.0)
    assert summary["inference_ms"] == pytest.approx(10.0)
    assert summary["total_ms"] == pytest.approx((14.0 + 4.0) / 2)
