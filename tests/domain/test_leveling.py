"""Tests for the experience curve - pure functions, no IO."""

import pytest

from petnote.domain.pet import BASE_EXP, apply_points, level_progress, required_experience


def test_required_experience_follows_curve():
    assert required_experience(1) == BASE_EXP
    assert required_experience(2) == pytest.approx(282.8427, rel=1e-6)
    assert required_experience(4) == pytest.approx(800)


def test_curve_is_strictly_increasing():
    for level in range(1, 200):
        assert required_experience(level + 1) > required_experience(level)


@pytest.mark.parametrize("level", [1, 2, 3, 7, 25])
def test_zero_delta_changes_nothing(level):
    for points in (0, required_experience(level) / 2, required_experience(level) - 1):
        assert apply_points(level, points, 0) == (level, points)


def test_single_level_up_carries_remainder():
    assert apply_points(1, 80, 250) == (2, 230)


def test_large_delta_levels_up_several_times():
    level, points = apply_points(1, 0, 1000)
    assert level == 4
    assert points == pytest.approx(1000 - 100 - 282.8427125 - 519.6152423)


def test_negative_delta_levels_down():
    level, points = apply_points(5, 10, -300)
    assert level == 4
    assert points == pytest.approx(510)


@pytest.mark.parametrize("points", [0, 1, 50, 99])
def test_level_one_never_goes_negative(points):
    assert apply_points(1, points, -(points + 1)) == (1, 0)
    assert apply_points(1, points, -10_000) == (1, 0)


def test_deficit_below_level_one_is_dropped():
    assert apply_points(3, 0, -100_000) == (1, 0)


@pytest.mark.parametrize(
    ("level", "points", "delta"),
    [
        (1, 80, 250),
        (2, 230, 1000),
        (5, 10, -300),
        (3, 400, 500),
    ],
)
def test_round_trip_without_clamping(level, points, delta):
    new_level, new_points = apply_points(level, points, delta)
    back_level, back_points = apply_points(new_level, new_points, -delta)
    assert back_level == level
    assert back_points == pytest.approx(points)


def test_result_stays_inside_level_bounds():
    for delta in range(-3000, 3000, 137):
        level, points = apply_points(3, 100, delta)
        assert level >= 1
        assert 0 <= points < required_experience(level)


def test_level_below_one_is_treated_as_one():
    assert apply_points(0, 0, 0) == (1, 0)


def test_level_progress():
    assert level_progress(1, 50) == pytest.approx(0.5)
    assert level_progress(2, 0) == 0


@pytest.mark.parametrize(("points", "delta"), [(0, 0), (10, -500), (80, 250), (5, 5)])
def test_points_are_always_float(points, delta):
    _, new_points = apply_points(1, points, delta)
    assert isinstance(new_points, float)
