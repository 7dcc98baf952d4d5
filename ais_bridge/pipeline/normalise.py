"""Apply the field mapping table to one MarineTraffic vessel record."""

from __future__ import annotations

from typing import Any, Iterable

from ais_bridge.common.constants import CONTEXT_PREFIX, SOURCE_LABEL_PREFIX, UNKNOWN_SOURCE
from ais_bridge.common.models import MappingRule, NormalizedEvent, PathValue, RawVesselRecord
from ais_bridge.common.time_utils import utc_timestamp_zulu
from ais_bridge.pipeline.converters import numeric_identifier_to_string, timestamp_conversion
from ais_bridge.pipeline.mapping import MAPPING_RULES


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and len(value) == 0)


def vessel_context(mmsi: Any) -> str:
    return CONTEXT_PREFIX + numeric_identifier_to_string({}, mmsi)


def source_label(record: RawVesselRecord) -> str:
    dsrc = record.get("DSRC")
    if _is_blank(dsrc):
        dsrc = UNKNOWN_SOURCE
    return SOURCE_LABEL_PREFIX + str(dsrc)


def event_timestamp(record: RawVesselRecord) -> str:
    raw = record.get("TIMESTAMP")
    if _is_blank(raw):
        return utc_timestamp_zulu()
    return timestamp_conversion(record, raw)


def map_values(record: RawVesselRecord, rules: Iterable[MappingRule] = MAPPING_RULES) -> tuple[PathValue, ...]:
    """Run every rule against the record, in order.

    Root-level rules accumulate into one object emitted under the empty path, at
    the position of the first root-level value that resolved. A later root rule
    with the same path overwrites the earlier value.
    """
    values: list[PathValue | None] = []
    root_values: dict[str, Any] = {}
    root_slot: int | None = None

    for rule in rules:
        if rule.key not in record:
            continue
        raw = record[rule.key]
        if _is_blank(raw):
            continue

        value = rule.convert(record, raw) if rule.convert is not None else raw
        if value is None:
            continue

        if rule.root:
            if root_slot is None:
                root_slot = len(values)
                values.append(None)
            root_values[rule.path] = value
            continue

        values.append(PathValue(rule.path, value))

    if root_slot is not None:
        values[root_slot] = PathValue("", root_values)
    return tuple(item for item in values if item is not None)


def normalise_record(
    record: RawVesselRecord,
    rules: Iterable[MappingRule] = MAPPING_RULES,
) -> NormalizedEvent | None:
    """Build the vessel event for one record, or None when it carries no MMSI."""
    mmsi = record.get("MMSI")
    if _is_blank(mmsi):
        return None

    return NormalizedEvent(
        context=vessel_context(mmsi),
        timestamp=event_timestamp(record),
        source_label=source_label(record),
        values=map_values(record, rules),
    )
