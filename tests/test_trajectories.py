import numpy as np
import pytest

from surfaceheat.config import ConfigurationError
from surfaceheat.pre.trajectories import (
    CircularTrajectory,
    CrossTrajectory,
    MotionPattern,
    get_trajectory,
    position_at,
)

CENTER = (25.0, 25.0)


def test_circle_start_and_half_turn():
    assert position_at(0.0, "circle", CENTER) == pytest.approx((40.0, 25.0))
    assert position_at(np.pi, "circle", CENTER) == pytest.approx((10.0, 25.0))
    assert position_at(np.pi / 2, "circle", CENTER) == pytest.approx((25.0, 40.0))


def test_circle_time_is_not_wrapped():
    assert position_at(0.3 + 2 * np.pi, "circle", CENTER) == pytest.approx(position_at(0.3, "circle", CENTER))


def test_cross_leg_endpoints():
    assert position_at(0.0, "x", CENTER) == pytest.approx((5.0, 5.0))
    assert position_at(1.0 - 1e-9, "x", CENTER) == pytest.approx((45.0, 45.0), abs=1e-6)
    assert position_at(1.0, "x", CENTER) == pytest.approx((45.0, 45.0))
    assert position_at(2.0, "x", CENTER) == pytest.approx((45.0, 5.0))
    assert position_at(3.0, "x", CENTER) == pytest.approx((5.0, 45.0))
    assert position_at(4.0, "x", CENTER) == pytest.approx((5.0, 5.0))


def test_cross_legs_pass_through_center():
    for t in (0.5, 1.5, 2.5, 3.5):
        assert position_at(t, "x", CENTER) == pytest.approx(CENTER)


def test_cross_is_periodic():
    assert position_at(5.25, "x", CENTER) == pytest.approx(position_at(1.25, "x", CENTER))


def test_cross_uses_both_center_coordinates():
    assert position_at(0.0, "x", (10.0, 30.0)) == pytest.approx((-10.0, 10.0))


def test_unknown_pattern_fails_fast():
    with pytest.raises(ConfigurationError, match="circle"):
        position_at(1.0, "zigzag", CENTER)


def test_pattern_lookup():
    assert MotionPattern("x") is MotionPattern.CROSS
    assert isinstance(get_trajectory("circle"), CircularTrajectory)
    assert isinstance(get_trajectory(MotionPattern.CROSS), CrossTrajectory)


def test_array_times_give_one_row_per_time():
    times = np.array([0.0, 0.5, 1.0])
    path = CrossTrajectory().get_position(times, CENTER)

    assert path.shape == (3, 2)
    np.testing.assert_allclose(path[1], CENTER)


def test_custom_radius():
    assert CircularTrajectory(radius=5.0).get_position(0.0, CENTER) == pytest.approx((30.0, 25.0))
    assert CrossTrajectory(max_radius=2.0).get_position(0.0, CENTER) == pytest.approx((23.0, 23.0))


def test_plot_on_given_axes():
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    returned = CrossTrajectory().plot(center=CENTER, ax=ax)

    assert returned is ax
    assert len(ax.lines) == 1
    plt.close(fig)
