"""Translate MarineTraffic batch payloads into vessel events."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable

from ais_bridge.common.errors import PayloadError
from ais_bridge.common.logging import log_event
from ais_bridge.common.models import MappingRule, NormalizedEvent
from ais_bridge.pipeline.mapping import MAPPING_RULES
from ais_bridge.pipeline.normalise import normalise_record

LOGGER = logging.getLogger(__name__)


@dataclass
class TranslationReport:
    events: list[NormalizedEvent] = field(default_factory=list)
    records_in: int = 0
    skipped: int = 0
    api_error: str | None = None


def parse_payload(payload: str | bytes) -> Any:
    try:
        return json.loads(payload)
    except ValueError as exc:
        raise PayloadError(f"Malformed MarineTraffic payload: {exc}") from exc


def api_error_detail(parsed: Mapping[str, Any]) -> str:
    errors = parsed.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, Mapping):
            detail = first.get("detail")
            if detail is not None:
                return str(detail)
        return json.dumps(first, ensure_ascii=False)
    return json.dumps(errors, ensure_ascii=False)


def translate_records(
    records: Iterable[Any],
    *,
    rules: Iterable[MappingRule] = MAPPING_RULES,
    logger: logging.Logger | None = None,
) -> TranslationReport:
    log = logger or LOGGER
    rules = tuple(rules)
    report = TranslationReport()

    for index, record in enumerate(records):
        report.records_in += 1
        if not isinstance(record, Mapping):
            report.skipped += 1
            log_event(
                log,
                f"skipping non-object vessel record at index {index}",
                level=logging.WARNING,
                event="RECORD_SKIPPED",
                status="warning",
            )
            continue
        try:
            event = normalise_record(record, rules)
        except (ArithmeticError, TypeError, ValueError) as exc:
            report.skipped += 1
            log_event(
                log,
                f"failed to normalise vessel record at index {index}: {exc}",
                level=logging.WARNING,
                event="RECORD_SKIPPED",
                status="warning",
            )
            continue
        if event is None:
            report.skipped += 1
            continue
        report.events.append(event)

    return report


def translate_batch_with_report(
    payload: str | bytes,
    *,
    rules: Iterable[MappingRule] = MAPPING_RULES,
    logger: logging.Logger | None = None,
) -> TranslationReport:
    log = logger or LOGGER
    parsed = parse_payload(payload)

    if isinstance(parsed, Mapping):
        if "errors" not in parsed:
            raise PayloadError("MarineTraffic payload is an object without an errors collection")
        detail = api_error_detail(parsed)
        log_event(
            log,
            f"error response from MarineTraffic: {detail}",
            level=logging.WARNING,
            event="API_ERROR",
            status="error",
            error_code="API_ERROR",
        )
        return TranslationReport(api_error=detail)

    if not isinstance(parsed, list):
        raise PayloadError(f"MarineTraffic payload must be a list of vessels, got {type(parsed).__name__}")

    report = translate_records(parsed, rules=rules, logger=log)
    log_event(
        log,
        "batch translated",
        level=logging.DEBUG,
        event="BATCH_TRANSLATED",
        status="ok",
        records_in=report.records_in,
        events_out=len(report.events),
    )
    return report


def translate_batch(
    payload: str | bytes,
    *,
    rules: Iterable[MappingRule] = MAPPING_RULES,
    logger: logging.Logger | None = None,
) -> list[NormalizedEvent]:
    return translate_batch_with_report(payload, rules=rules, logger=logger).events
