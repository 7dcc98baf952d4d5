"""Spherical dead reckoning."""

from __future__ import annotations

import math

from ais_bridge.pipeline.converters import degrees_to_radians, radians_to_degrees

NAUTICAL_MILES_PER_RADIAN = 180 * 60 / math.pi
ANTIMERIDIAN_TOLERANCE = 1e-12


def _mod(x: float, y: float) -> float:
    # Floor-based, so the result takes the sign of y.
    return x - y * math.floor(x / y)


def project_position(position: dict, heading: float, distance: float) -> dict[str, float]:
    """Project ``position`` (degrees) along ``heading`` (radians) for ``distance`` metres."""
    dist = (distance / 1000) / 1.852
    dist /= NAUTICAL_MILES_PER_RADIAN

    heading = (math.pi * 2) - heading
    lat1 = degrees_to_radians(position["latitude"])
    lon1 = degrees_to_radians(position["longitude"])

    lat = math.asin(math.sin(lat1) * math.cos(dist) + math.cos(lat1) * math.sin(dist) * math.cos(heading))
    dlon = math.atan2(
        math.sin(heading) * math.sin(dist) * math.cos(lat1),
        math.cos(dist) - math.sin(lat1) * math.sin(lat),
    )
    lon = _mod(lon1 - dlon + math.pi, 2 * math.pi) - math.pi
    if lon <= -math.pi + ANTIMERIDIAN_TOLERANCE:
        # Longitude range is (-180, 180]; -180 within rounding is the antimeridian.
        lon += 2 * math.pi

    return {"latitude": radians_to_degrees(lat), "longitude": radians_to_degrees(lon)}


def extrapolate_position(position: dict, course: float, speed: float, elapsed_seconds: float) -> dict[str, float]:
    """Dead-reckon from the last fix given course (radians) and speed (m/s)."""
    return project_position(position, course, speed * elapsed_seconds)
