import pytest

from poselift.errors import ConfigurationError
from poselift.pose.smoother import MovingAverageFilter, TemporalSmoother

from conftest import make_point


def test_filter_buffer_never_exceeds_limit():
    joint_filter = MovingAverageFilter(limit=3)
    for i in range(10):
        joint_filter.add(make_point(i * 0.1))
        assert len(joint_filter) == min(i + 1, 3)


def test_filter_averages_all_fields():
    joint_filter = MovingAverageFilter(limit=3)
    joint_filter.add(make_point(0.2, 0.4, confidence=0.5))
    average = joint_filter.add(make_point(0.4, 0.8, confidence=1.5))
    assert average.x == pytest.approx(0.3)
    assert average.y == pytest.approx(0.6)
    assert average.confidence == pytest.approx(1.0)
    assert joint_filter.average == average


def test_window_of_three_averages_last_values():
    smoother = TemporalSmoother(window_size=3)
    outputs = [smoother.observe([make_point(x)])[0].x for x in [0.0, 0.3, 0.6, 0.9]]
    assert outputs == pytest.approx([0.0, 0.15, 0.3, 0.6])


def test_constant_input_converges_to_itself():
    window_size = 4
    smoother = TemporalSmoother(window_size=window_size)
    smoother.observe([make_point(0.9, 0.1, confidence=0.2)])
    smoother.reset()

    point = make_point(0.25, 0.75, confidence=0.6)
    outputs = [smoother.observe([point])[0] for _ in range(window_size + 3)]
    for out in outputs[window_size - 1:]:
        assert out.x == pytest.approx(0.25)
        assert out.y == pytest.approx(0.75)
        assert out.confidence == pytest.approx(0.6)


def test_constant_input_after_other_values_settles_at_window_size():
    window_size = 3
    smoother = TemporalSmoother(window_size=window_size)
    smoother.observe([make_point(1.0)])
    point = make_point(0.4)
    outputs = [smoother.observe([point])[0].x for _ in range(window_size + 2)]
    assert outputs[0] == pytest.approx(0.7)
    assert outputs[window_size - 1:] == pytest.approx([0.4] * 3)


def test_window_size_one_passes_input_through():
    smoother = TemporalSmoother(window_size=1)
    smoother.observe([make_point(0.1)])
    assert smoother.observe([make_point(0.9)])[0].x == pytest.approx(0.9)


def test_joint_count_change_discards_all_history():
    smoother = TemporalSmoother(window_size=3)
    for _ in range(3):
        smoother.observe([make_point(0.0, joint_index=j) for j in range(5)])

    fresh = [make_point(0.1 * (j + 1), joint_index=j) for j in range(6)]
    outputs = smoother.observe(fresh)
    assert [p.x for p in outputs] == pytest.approx([p.x for p in fresh])
    assert smoother.joint_count == 6
    assert smoother.rebuild_count == 2


def test_same_joint_count_keeps_history():
    smoother = TemporalSmoother(window_size=3)
    smoother.observe([make_point(0.0), make_point(0.0, joint_index=1)])
    for _ in range(5):
        smoother.observe([make_point(0.6), make_point(0.6, joint_index=1)])
    assert smoother.rebuild_count == 1


def test_absent_point_repeats_previous_average():
    smoother = TemporalSmoother(window_size=3)
    smoother.observe([make_point(0.2), make_point(0.5, joint_index=1)])
    out = smoother.observe([None, make_point(0.7, joint_index=1)])
    assert out[0].x == pytest.approx(0.2)
    assert out[1].x == pytest.approx(0.6)

    # absence is not averaged in as a zero
    out = smoother.observe([make_point(0.4), make_point(0.7, joint_index=1)])
    assert out[0].x == pytest.approx(0.3)


def test_absent_point_without_history_stays_absent():
    smoother = TemporalSmoother()
    assert smoother.observe([None, make_point(0.5, joint_index=1)])[0] is None


def test_reset_starts_fresh():
    smoother = TemporalSmoother(window_size=3)
    smoother.observe([make_point(1.0)])
    smoother.reset()
    assert smoother.joint_count == 0
    assert smoother.observe([make_point(0.0)])[0].x == pytest.approx(0.0)


def test_reset_clears_rebuild_count():
    smoother = TemporalSmoother()
    smoother.observe([make_point(0.1)])
    smoother.observe([make_point(0.1), make_point(0.2, joint_index=1)])
    assert smoother.rebuild_count == 2
    smoother.reset()
    assert smoother.rebuild_count == 0


def test_output_keeps_label_and_index():
    smoother = TemporalSmoother()
    out = smoother.observe([make_point(0.5, joint_index=0, label="top")])
    assert out[0].label == "top"
    assert out[0].joint_index == 0


@pytest.mark.parametrize("window_size", [0, -1, 2.5, True, "3"])
def test_invalid_window_size_rejected(window_size):
    with pytest.raises(ConfigurationError):
        TemporalSmoother(window_size=window_size)
