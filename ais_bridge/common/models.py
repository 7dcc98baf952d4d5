"""Data models shared by the mapping engine and delivery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

RawVesselRecord = Mapping[str, Any]
Converter = Callable[[RawVesselRecord, Any], Any]


@dataclass(frozen=True)
class MappingRule:
    """One output field: where it comes from, where it goes, and how it is converted.

    A converter receives the whole raw record alongside the field's own value so it
    can derive from sibling fields. Returning None suppresses the field.
    """

    path: str
    key: str
    root: bool = False
    convert: Optional[Converter] = None


@dataclass(frozen=True)
class PathValue:
    path: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "value": self.value}


@dataclass(frozen=True)
class NormalizedEvent:
    context: str
    timestamp: str
    source_label: str
    values: tuple[PathValue, ...] = ()

    def to_delta(self) -> dict[str, Any]:
        return {
            "context": self.context,
            "updates": [
                {
                    "timestamp": self.timestamp,
                    "source": {"label": self.source_label},
                    "values": [item.to_dict() for item in self.values],
                }
            ],
        }
