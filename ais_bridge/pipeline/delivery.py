"""Hand translated events to downstream consumers as Signal K deltas."""

from __future__ import annotations

import json
from typing import Iterable, Protocol, TextIO

from ais_bridge.common.models import NormalizedEvent


class EventSink(Protocol):
    def send(self, event: NormalizedEvent) -> None: ...


class StreamEventSink:
    """Writes one JSON delta per line."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def send(self, event: NormalizedEvent) -> None:
        self.stream.write(json.dumps(event.to_delta(), ensure_ascii=False))
        self.stream.write("\n")
        self.stream.flush()


def deliver(events: Iterable[NormalizedEvent], sink: EventSink) -> int:
    count = 0
    for event in events:
        sink.send(event)
        count += 1
    return count
