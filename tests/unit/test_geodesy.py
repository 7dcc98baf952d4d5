import math

import pytest

from ais_bridge.pipeline.geodesy import extrapolate_position, project_position

ONE_NM = 1852


@pytest.mark.parametrize(
    "position",
    [
        {"latitude": 0.0, "longitude": 0.0},
        {"latitude": 47.758499, "longitude": -5.154223},
        {"latitude": -33.9, "longitude": 151.2},
    ],
)
@pytest.mark.parametrize("heading", [0.0, 1.0, math.pi])
def test_zero_distance_returns_start(position, heading):
    projected = project_position(position, heading, 0)

    assert projected["latitude"] == pytest.approx(position["latitude"], abs=1e-9)
    assert projected["longitude"] == pytest.approx(position["longitude"], abs=1e-9)


def test_one_nautical_mile_north_is_one_arc_minute():
    projected = project_position({"latitude": 0.0, "longitude": 0.0}, 0.0, ONE_NM)

    assert projected["latitude"] == pytest.approx(1 / 60)
    assert projected["longitude"] == pytest.approx(0.0, abs=1e-12)


def test_heading_east_and_west_on_equator():
    east = project_position({"latitude": 0.0, "longitude": 0.0}, math.pi / 2, ONE_NM)
    west = project_position({"latitude": 0.0, "longitude": 0.0}, 3 * math.pi / 2, ONE_NM)

    assert east["longitude"] == pytest.approx(1 / 60)
    assert west["longitude"] == pytest.approx(-1 / 60)
    assert east["latitude"] == pytest.approx(0.0, abs=1e-12)


def test_longitude_wraps_across_antimeridian():
    projected = project_position({"latitude": 0.0, "longitude": 179.99}, math.pi / 2, ONE_NM)

    assert projected["longitude"] == pytest.approx(179.99 + 1 / 60 - 360)


def test_extrapolate_uses_speed_times_elapsed():
    one_knot = ONE_NM / 3600
    projected = extrapolate_position({"latitude": 10.0, "longitude": 20.0}, 0.0, one_knot, 3600)

    assert projected["latitude"] == pytest.approx(10 + 1 / 60)
    assert projected["longitude"] == pytest.approx(20.0)


@pytest.mark.parametrize("longitude", [180.0, -180.0])
def test_antimeridian_is_reported_as_plus_180(longitude):
    # Longitude range is (-180, 180].
    projected = project_position({"latitude": 0.0, "longitude": longitude}, 0.0, 0)

    assert projected["longitude"] == pytest.approx(180.0)
