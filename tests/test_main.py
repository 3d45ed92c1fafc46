import numpy as np
import pytest

import run
from poselift.main import load_heatmaps, run_pipeline


def test_load_heatmaps_npz(tmp_path):
    path = tmp_path / "clip.npz"
    stack = np.zeros((2, 3, 4, 4), dtype=np.float32)
    np.savez(path, heatmaps=stack)
    assert load_heatmaps(path).shape == (2, 3, 4, 4)


def test_load_heatmaps_rejects_wrong_rank(tmp_path):
    path = tmp_path / "bad.npy"
    np.save(path, np.zeros((3, 4, 4)))
    with pytest.raises(ValueError):
        load_heatmaps(path)


def test_load_heatmaps_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_heatmaps(tmp_path / "missing.npy")


def test_run_pipeline_replays_file(tmp_path):
    stack = np.zeros((5, 2, 4, 4))
    stack[:, 0, 0, 0] = 1.0
    stack[:, 1, 3, 3] = 1.0
    stack[2] = np.nan
    path = tmp_path / "clip.npy"
    np.save(path, stack)

    summary = run_pipeline(heatmaps_path=path)
    assert summary["frames"] == 5
    assert summary["dropped_frames"] == 1
    assert summary["filter_rebuilds"] == 1
    assert summary["output_path"] is None
    assert summary["final_points"][1].x == pytest.approx(1.0)
    assert summary["timing"]["frames"] == 5


def test_cli_synthetic_demo(capsys):
    assert run.main([]) == 0
    out = capsys.readouterr().out
    assert "Synthetic demo" in out
    assert "left_ankle" in out


def test_cli_rejects_bad_window(capsys):
    assert run.main(["--window", "0"]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_cli_missing_file(tmp_path, capsys):
    assert run.main([str(tmp_path / "nope.npz")]) == 1


def test_empty_npz_is_reported_as_value_error(tmp_path):
    path = tmp_path / "empty.npz"
    np.savez(path)
    with pytest.raises(ValueError):
        load_heatmaps(path)


def test_cli_empty_npz_exits_with_error(tmp_path, capsys):
    path = tmp_path / "empty.npz"
    np.savez(path)
    assert run.main([str(path)]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_run_pipeline_renders_overlay_without_video(tmp_path):
    output = tmp_path / "overlay.mp4"
    stack = np.zeros((3, 2, 4, 4))
    stack[:, 0, 1, 1] = 1.0
    stack[:, 1, 2, 2] = 1.0
    path = tmp_path / "clip.npy"
    np.save(path, stack)

    summary = run_pipeline(heatmaps_path=path, output_path=output)
    assert summary["frames_written"] == 3
    assert summary["output_path"] == output
    assert output.exists()
