"""Minimal strict schema for YAML config validation."""

from __future__ import annotations

from ais_bridge.common.constants import QUERY_TIERS
from ais_bridge.common.errors import ConfigError


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_mapping(obj: object, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_number(value: object, ctx: str) -> None:
    # bool is an int subclass, but `rates.full: true` is a config mistake.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{ctx} must be a number")


def validate_bridge_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "bridge config")
    top_required = {"marinetraffic", "rates"}
    top_known = top_required | {"http"}
    _assert_required_keys(cfg, top_required, "bridge config")
    _assert_no_unknown_keys(cfg, top_known, "bridge config", allow_unknown)

    api = cfg["marinetraffic"]
    _assert_mapping(api, "marinetraffic")
    _assert_required_keys(api, {"apikey", "timespan"}, "marinetraffic")
    _assert_no_unknown_keys(api, {"apikey", "base_url", "timespan", "vessel"}, "marinetraffic", allow_unknown)
    if api["apikey"] is not None and not isinstance(api["apikey"], str):
        raise ConfigError("marinetraffic.apikey must be a string")
    _assert_number(api["timespan"], "marinetraffic.timespan")
    if api["timespan"] <= 0:
        raise ConfigError("marinetraffic.timespan must be positive")
    _assert_number(api.get("vessel", 0), "marinetraffic.vessel")

    rates = cfg["rates"]
    _assert_mapping(rates, "rates")
    _assert_required_keys(rates, set(QUERY_TIERS), "rates")
    _assert_no_unknown_keys(rates, set(QUERY_TIERS), "rates", allow_unknown)
    for tier in QUERY_TIERS:
        _assert_number(rates[tier], f"rates.{tier}")

    http_cfg = cfg.get("http", {})
    _assert_mapping(http_cfg, "http")
    http_known = {"connect_timeout", "read_timeout", "max_attempts"}
    _assert_no_unknown_keys(http_cfg, http_known, "http", allow_unknown)
    for key in sorted(http_known & set(http_cfg)):
        _assert_number(http_cfg[key], f"http.{key}")

    return cfg
