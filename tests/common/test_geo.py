import pytest

from staff_payroll.common.geo import distance_meters, has_coordinate, is_within_radius


def test_distance_to_self_is_zero():
    assert distance_meters(12.9716, 77.5946, 12.9716, 77.5946) == 0


def test_one_degree_of_latitude():
    assert distance_meters(0, 0, 1, 0) == pytest.approx(111_195, abs=1)


def test_distance_is_symmetric():
    a = distance_meters(12.9716, 77.5946, 13.0, 77.6)
    b = distance_meters(13.0, 77.6, 12.9716, 77.5946)
    assert a == pytest.approx(b)


def test_radius_boundary_is_inclusive():
    d = distance_meters(12.9720, 77.5950, 12.9716, 77.5946)

    assert is_within_radius(12.9720, 77.5950, 12.9716, 77.5946, d)
    assert not is_within_radius(12.9720, 77.5950, 12.9716, 77.5946, d - 0.01)


def test_far_point_is_outside_radius():
    assert not is_within_radius(13.0, 77.6, 12.9716, 77.5946, 100)


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        (12.9716, 77.5946, True),
        (None, 77.5946, False),
        (12.9716, None, False),
        (0, 0, False),
        (0, 77.5946, False),
    ],
)
def test_has_coordinate(lat, lon, expected):
    assert has_coordinate(lat, lon) is expected
