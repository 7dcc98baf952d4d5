"""Field mapping table from MarineTraffic vessel records to Signal K paths.

Rule order is output order. Dimension and position rules derive from sibling
fields of the same record: ``A``/``B`` are the AIS antenna's distances to bow
and stern, ``C``/``D`` to port and starboard.
"""

from __future__ import annotations

from typing import Any

from ais_bridge.common.models import MappingRule, RawVesselRecord
from ais_bridge.pipeline.converters import (
    course_conversion,
    distance_conversion,
    draught_conversion,
    heading_conversion,
    make_ship_type_conversion,
    navigation_state_conversion,
    numeric_identifier_to_string,
    speed_conversion,
    timestamp_conversion,
    to_float,
    to_number,
)
from ais_bridge.pipeline.ship_types import ShipTypeResolver, resolve_ship_type_name


def _offset_pair(record: RawVesselRecord, first: str, second: str) -> tuple[float, float] | None:
    a = to_number(record.get(first))
    b = to_number(record.get(second))
    if a is None or b is None:
        return None
    return a, b


def from_bow_conversion(record: RawVesselRecord, value: Any) -> float | None:
    pair = _offset_pair(record, "A", "B")
    if pair is None:
        return None
    to_bow, to_stern = pair
    if to_bow + to_stern == 0:
        return None
    return to_bow


def from_center_conversion(record: RawVesselRecord, value: Any) -> float | None:
    pair = _offset_pair(record, "C", "D")
    if pair is None:
        return None
    to_port, to_starboard = pair
    width = to_port + to_starboard
    if width == 0:
        return None
    # Starboard of the centreline is negative.
    if to_starboard > width / 2:
        return -(to_starboard - width / 2)
    return width / 2 - to_starboard


def length_conversion(record: RawVesselRecord, value: Any) -> dict[str, float] | None:
    pair = _offset_pair(record, "A", "B")
    if pair is None:
        return None
    length = pair[0] + pair[1]
    if length == 0:
        return None
    return {"overall": length}


def beam_conversion(record: RawVesselRecord, value: Any) -> float | None:
    pair = _offset_pair(record, "C", "D")
    if pair is None:
        return None
    beam = pair[0] + pair[1]
    if beam == 0:
        return None
    return beam


def position_conversion(record: RawVesselRecord, value: Any) -> dict[str, float | None] | None:
    latitude = to_float(value)
    if latitude is None:
        return None
    # A missing LON is passed through as None rather than dropping the fix.
    return {"latitude": latitude, "longitude": to_float(record.get("LON"))}


def build_mapping_rules(resolver: ShipTypeResolver = resolve_ship_type_name) -> tuple[MappingRule, ...]:
    return (
        MappingRule("mmsi", "MMSI", root=True, convert=numeric_identifier_to_string),
        MappingRule("name", "SHIPNAME", root=True),
        MappingRule("callsign", "CALLSIGN", root=True),
        MappingRule("imo", "IMO", root=True, convert=numeric_identifier_to_string),
        MappingRule("navigation.courseOverGroundTrue", "COURSE", convert=course_conversion),
        MappingRule("navigation.headingTrue", "HEADING", convert=heading_conversion),
        MappingRule("navigation.destination.commonName", "DESTINATION"),
        MappingRule("sensors.ais.fromBow", "A", convert=from_bow_conversion),
        MappingRule("sensors.ais.fromCenter", "C", convert=from_center_conversion),
        MappingRule("design.length", "A", convert=length_conversion),
        MappingRule("design.beam", "C", convert=beam_conversion),
        MappingRule("design.draft", "DRAUGHT", convert=draught_conversion),
        MappingRule("navigation.position", "LAT", convert=position_conversion),
        MappingRule("navigation.speedOverGround", "SPEED", convert=speed_conversion),
        MappingRule("design.aisShipType", "SHIPTYPE", convert=make_ship_type_conversion(resolver)),
        MappingRule("navigation.state", "STATUS", convert=navigation_state_conversion),
        MappingRule(
            "navigation.courseGreatCircle.activeRoute.estimatedTimeOfArrival",
            "ETA",
            convert=timestamp_conversion,
        ),
        MappingRule("navigation.logTrip", "DISTANCE_TRAVELLED", convert=distance_conversion),
    )


MAPPING_RULES = build_mapping_rules()
