"""Unit and sentinel converters for MarineTraffic vessel fields.

Every converter takes ``(record, value)`` and returns the normalised value, or
None when nothing should be emitted for the field.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any

from ais_bridge.common.models import Converter, RawVesselRecord
from ais_bridge.pipeline.ship_types import ShipTypeResolver, resolve_ship_type_name

KNOTS_TO_METERS_PER_SECOND = 0.514444
METERS_PER_NAUTICAL_MILE = 1852
COURSE_NOT_AVAILABLE = 360
HEADING_NOT_AVAILABLE = 511

NAVIGATION_STATES = MappingProxyType(
    {
        0: "motoring",
        1: "anchored",
        2: "not under command",
        3: "restricted manoeuvrability",
        4: "constrained by draft",
        5: "moored",
        6: "aground",
        7: "fishing",
        8: "sailing",
        9: "hazardous material high speed",
        10: "hazardous material wing in ground",
        14: "ais-sart",
    }
)


def to_number(value: Any) -> int | float | None:
    """Coerce a vendor value to a finite number, keeping integral values as int."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        # Arbitrary-precision JSON ints may not fit a float.
        try:
            float(value)
        except OverflowError:
            return None
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def to_float(value: Any) -> float | None:
    number = to_number(value)
    if number is None:
        return None
    return float(number)


def degrees_to_radians(value: float) -> float:
    return value * (math.pi / 180.0)


def radians_to_degrees(value: float) -> float:
    return value * 180 / math.pi


def course_conversion(record: RawVesselRecord, value: Any) -> float | None:
    degrees = to_number(value)
    if degrees is None or degrees == COURSE_NOT_AVAILABLE:
        return None
    return degrees_to_radians(degrees)


def heading_conversion(record: RawVesselRecord, value: Any) -> float | None:
    degrees = to_number(value)
    if degrees is None or degrees == HEADING_NOT_AVAILABLE:
        return None
    return degrees_to_radians(degrees)


def speed_conversion(record: RawVesselRecord, value: Any) -> float | None:
    # Tenths of a knot.
    tenths = to_number(value)
    if tenths is None:
        return None
    return tenths / 10 * KNOTS_TO_METERS_PER_SECOND


def draught_conversion(record: RawVesselRecord, value: Any) -> dict[str, float] | None:
    # Tenths of a metre; 0 means not reported.
    tenths = to_number(value)
    if tenths is None or tenths == 0:
        return None
    return {"maximum": tenths / 10}


def distance_conversion(record: RawVesselRecord, value: Any) -> float | None:
    distance = to_number(value)
    if distance is None:
        return None
    return distance / METERS_PER_NAUTICAL_MILE


def timestamp_conversion(record: RawVesselRecord, value: Any) -> str:
    # MarineTraffic reports UTC without a zone designator.
    return f"{value}Z"


def numeric_identifier_to_string(record: RawVesselRecord, value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def navigation_state_conversion(record: RawVesselRecord, value: Any) -> str | None:
    code = to_number(value)
    if not isinstance(code, int):
        return None
    return NAVIGATION_STATES.get(code)


def make_ship_type_conversion(resolver: ShipTypeResolver = resolve_ship_type_name) -> Converter:
    def ship_type_conversion(record: RawVesselRecord, value: Any) -> dict[str, Any] | None:
        code = to_number(value)
        if not isinstance(code, int):
            return None
        name = resolver(code)
        if not name:
            return None
        return {"id": code, "name": name}

    return ship_type_conversion


ship_type_conversion = make_ship_type_conversion()
