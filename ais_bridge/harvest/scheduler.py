"""Periodic polling of the enabled query tiers."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ais_bridge.common.config_loader import BridgeConfig
from ais_bridge.common.constants import QUERY_TIERS
from ais_bridge.common.logging import log_event
from ais_bridge.harvest.cycle import CycleResult

CycleRunner = Callable[[str], CycleResult]


def initial_tier(config: BridgeConfig) -> str:
    """The most comprehensive enabled tier, falling back to simple."""
    for tier in QUERY_TIERS:
        if config.rate_for(tier) > 0:
            return tier
    return "simple"


def tier_intervals(config: BridgeConfig) -> dict[str, float]:
    return {tier: config.rate_for(tier) * 60 for tier in config.enabled_tiers()}


class PollScheduler:
    def __init__(self, config: BridgeConfig, run_cycle: CycleRunner, logger: logging.Logger) -> None:
        self.config = config
        self.run_cycle = run_cycle
        self.logger = logger
        self.stop_event = threading.Event()
        self.threads: list[threading.Thread] = []

    def _guarded_cycle(self, tier: str) -> None:
        try:
            self.run_cycle(tier)
        except Exception:
            # Keep the tier thread alive; the next interval retries.
            self.logger.exception("unexpected failure in %s cycle", tier, extra={"tier": tier, "event": "CYCLE_FAIL"})

    def _poll(self, tier: str, interval: float) -> None:
        while not self.stop_event.wait(interval):
            self._guarded_cycle(tier)

    def start(self) -> None:
        self.stop_event.clear()
        self._guarded_cycle(initial_tier(self.config))
        for tier, interval in tier_intervals(self.config).items():
            thread = threading.Thread(target=self._poll, args=(tier, interval), name=f"poll-{tier}", daemon=True)
            thread.start()
            self.threads.append(thread)
            log_event(self.logger, f"polling {tier} every {interval:g}s", tier=tier, event="TIER_START", status="ok")

    def stop(self, timeout: float | None = None) -> None:
        self.stop_event.set()
        for thread in self.threads:
            thread.join(timeout)
        self.threads.clear()

    def wait(self) -> None:
        self.stop_event.wait()
