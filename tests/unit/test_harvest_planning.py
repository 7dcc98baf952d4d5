import logging
import threading

import pytest

from ais_bridge.common.config_loader import BridgeConfig
from ais_bridge.common.http import RetryConfig, TimeoutConfig
from ais_bridge.harvest.cycle import CycleResult
from ais_bridge.harvest.endpoints import build_endpoint, redact_endpoint
from ais_bridge.harvest.scheduler import PollScheduler, initial_tier, tier_intervals


def _config(simple=120.0, extended=60.0, full=60.0, vessel=0):
    return BridgeConfig(
        apikey="KEY",
        base_url="https://services.marinetraffic.com/api",
        timespan=10,
        vessel=vessel,
        rates={"simple": simple, "extended": extended, "full": full},
        timeout=TimeoutConfig(),
        retry=RetryConfig(),
    )


def test_tiered_endpoint():
    assert build_endpoint(_config(), "extended") == (
        "https://services.marinetraffic.com/api/exportvessels/v:8/KEY/timespan:10/msgtype:extended/protocol:jsono"
    )


def test_single_vessel_endpoint_ignores_tier():
    assert build_endpoint(_config(vessel=304010417), "simple") == (
        "https://services.marinetraffic.com/api/exportvessels/v:5/KEY/timespan:10/mmsi:304010417/protocol:jsono"
    )


def test_unknown_tier_is_rejected():
    with pytest.raises(ValueError):
        build_endpoint(_config(), "hourly")


def test_redact_endpoint_hides_api_key():
    assert "KEY" not in redact_endpoint(build_endpoint(_config(), "full"), "KEY")


@pytest.mark.parametrize(
    "rates,expected",
    [
        ((120, 60, 60), "full"),
        ((120, 60, 0), "extended"),
        ((120, -1, -1), "simple"),
        ((0, 0, 0), "simple"),
    ],
)
def test_initial_tier_prefers_most_comprehensive(rates, expected):
    simple, extended, full = rates
    assert initial_tier(_config(simple, extended, full)) == expected


def test_tier_intervals_skip_disabled_tiers():
    assert tier_intervals(_config(120, -1, 0.5)) == {"full": 30.0, "simple": 7200.0}


def test_scheduler_runs_initial_cycle_then_polls_until_stopped():
    calls: list[str] = []
    enough = threading.Event()
    lock = threading.Lock()

    def fake_cycle(tier):
        with lock:
            calls.append(tier)
            if len(calls) >= 4:
                enough.set()
        return CycleResult(tier=tier, status="ok")

    scheduler = PollScheduler(_config(simple=-1, extended=-1, full=0.0005), fake_cycle, logging.getLogger("tests.scheduler"))
    scheduler.start()
    try:
        assert enough.wait(timeout=5)
    finally:
        scheduler.stop(timeout=5)

    assert calls[0] == "full"
    assert set(calls) == {"full"}
    assert scheduler.threads == []


def test_scheduler_survives_a_failing_cycle():
    calls: list[str] = []
    recovered = threading.Event()

    def flaky_cycle(tier):
        calls.append(tier)
        if len(calls) == 1:
            raise RuntimeError("boom")
        recovered.set()
        return CycleResult(tier=tier, status="ok")

    scheduler = PollScheduler(_config(simple=0.0005, extended=-1, full=-1), flaky_cycle, logging.getLogger("tests.scheduler"))
    scheduler.start()
    try:
        assert recovered.wait(timeout=5)
    finally:
        scheduler.stop(timeout=5)
