"""One fetch, translate and deliver cycle for a query tier."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from ais_bridge.common.config_loader import BridgeConfig
from ais_bridge.common.errors import BridgeError
from ais_bridge.common.http import HttpClient
from ais_bridge.common.logging import log_event
from ais_bridge.harvest.endpoints import build_endpoint, redact_endpoint
from ais_bridge.pipeline.delivery import EventSink, deliver
from ais_bridge.pipeline.translate import translate_batch_with_report


@dataclass(frozen=True)
class CycleResult:
    tier: str
    status: str
    records_in: int = 0
    events_out: int = 0
    error_code: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def run_cycle(
    tier: str,
    config: BridgeConfig,
    client: HttpClient,
    sink: EventSink,
    logger: logging.Logger,
    run_id: str | None = None,
) -> CycleResult:
    started = time.monotonic()
    url = build_endpoint(config, tier)
    log_event(
        logger,
        f"fetching {redact_endpoint(url, config.apikey)}",
        level=logging.DEBUG,
        run_id=run_id,
        stage="fetch",
        tier=tier,
        event="FETCH_START",
        status="ok",
    )

    try:
        payload = client.get_text(url, timeout=config.timeout)
        report = translate_batch_with_report(payload, logger=logger)
    except BridgeError as exc:
        log_event(
            logger,
            f"{tier} cycle failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            stage="fetch",
            tier=tier,
            event="CYCLE_FAIL",
            status="error",
            error_code=exc.error_code,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return CycleResult(tier=tier, status="error", error_code=exc.error_code)

    if report.api_error is not None:
        return CycleResult(tier=tier, status="api_error", error_code="API_ERROR")

    delivered = deliver(report.events, sink)
    log_event(
        logger,
        f"{tier} cycle delivered {delivered} events",
        run_id=run_id,
        stage="deliver",
        tier=tier,
        event="CYCLE_END",
        status="ok",
        records_in=report.records_in,
        events_out=delivered,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    return CycleResult(tier=tier, status="ok", records_in=report.records_in, events_out=delivered)
