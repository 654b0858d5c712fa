import math

import pytest

from src.office_attendance.office_attendance.common.geo import accuracy_buffer_m, haversine_distance_m


def test_same_point_is_zero_distance():
    assert haversine_distance_m(12.9716, 77.5946, 12.9716, 77.5946) == 0.0


def test_one_degree_of_latitude():
    expected = 6_371_000 * math.pi / 180
    assert haversine_distance_m(0.0, 10.0, 1.0, 10.0) == pytest.approx(expected, rel=1e-9)


def test_distance_is_symmetric():
    a = haversine_distance_m(12.9716, 77.5946, 12.9800, 77.6000)
    b = haversine_distance_m(12.9800, 77.6000, 12.9716, 77.5946)
    assert a == pytest.approx(b)


@pytest.mark.parametrize(
    "accuracy, expected",
    [(None, 30.0), (0, 30.0), (5, 20.0), (20, 20.0), (50, 50.0), (100, 100.0), (250, 100.0)],
)
def test_accuracy_buffer_is_clamped(accuracy, expected):
    assert accuracy_buffer_m(accuracy) == expected
