"""MarineTraffic export-vessels endpoint construction."""

from __future__ import annotations

from ais_bridge.common.config_loader import BridgeConfig
from ais_bridge.common.constants import QUERY_TIERS


def build_endpoint(config: BridgeConfig, tier: str) -> str:
    if tier not in QUERY_TIERS:
        raise ValueError(f"Unknown query tier: {tier}")
    if config.vessel != 0:
        # Single-vessel queries (PS07) ignore the tier.
        return (
            f"{config.base_url}/exportvessels/v:5/{config.apikey}"
            f"/timespan:{config.timespan}/mmsi:{config.vessel}/protocol:jsono"
        )
    return (
        f"{config.base_url}/exportvessels/v:8/{config.apikey}"
        f"/timespan:{config.timespan}/msgtype:{tier}/protocol:jsono"
    )


def redact_endpoint(url: str, apikey: str) -> str:
    return url.replace(apikey, "***") if apikey else url
