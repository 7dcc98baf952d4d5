"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ais_bridge.common.constants import API_KEY_ENV_VAR, DEFAULT_BASE_URL, QUERY_TIERS
from ais_bridge.common.errors import ConfigError
from ais_bridge.common.fs import read_yaml
from ais_bridge.common.http import RetryConfig, TimeoutConfig
from ais_bridge.common.schema import validate_bridge_config

CONFIG_FILENAME = "bridge.yml"


@dataclass(frozen=True)
class BridgeConfig:
    apikey: str
    base_url: str
    timespan: int
    vessel: int
    rates: dict[str, float]
    timeout: TimeoutConfig
    retry: RetryConfig

    def rate_for(self, tier: str) -> float:
        return self.rates[tier]

    def enabled_tiers(self) -> list[str]:
        return [tier for tier in QUERY_TIERS if self.rates[tier] > 0]


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def build_bridge_config(cfg: dict, *, environ: dict[str, str] | None = None) -> BridgeConfig:
    env = os.environ if environ is None else environ
    api = cfg["marinetraffic"]
    apikey = api.get("apikey") or env.get(API_KEY_ENV_VAR, "")
    if not apikey:
        raise ConfigError(f"marinetraffic.apikey is empty and {API_KEY_ENV_VAR} is not set")

    http_cfg = cfg.get("http", {})
    timeout = TimeoutConfig(
        connect=float(http_cfg.get("connect_timeout", TimeoutConfig.connect)),
        read=float(http_cfg.get("read_timeout", TimeoutConfig.read)),
    )
    retry = RetryConfig(max_attempts=int(http_cfg.get("max_attempts", RetryConfig.max_attempts)))

    return BridgeConfig(
        apikey=apikey,
        base_url=str(api.get("base_url") or DEFAULT_BASE_URL).rstrip("/"),
        timespan=int(api["timespan"]),
        vessel=int(api.get("vessel") or 0),
        rates={tier: float(cfg["rates"][tier]) for tier in QUERY_TIERS},
        timeout=timeout,
        retry=retry,
    )


def load_bridge_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
    environ: dict[str, str] | None = None,
) -> BridgeConfig:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / CONFIG_FILENAME
    raw = _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path)
    validated = validate_bridge_config(raw, allow_unknown=allow_unknown)
    return build_bridge_config(validated, environ=environ)
