from pathlib import Path

import pytest

from ais_bridge.common.config_loader import load_bridge_config
from ais_bridge.common.errors import ConfigError

REPO_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"

BASE_YAML = """marinetraffic:
  apikey: "file-key"
  timespan: 10
  vessel: 0
rates:
  simple: 120
  extended: 60
  full: -1
"""


def _write(dir_path: Path, text: str) -> Path:
    dir_path.mkdir(parents=True, exist_ok=True)
    (dir_path / "bridge.yml").write_text(text, encoding="utf-8")
    return dir_path


def test_load_repo_config_with_env_api_key():
    config = load_bridge_config(REPO_CONFIG_DIR, environ={"MARINETRAFFIC_API_KEY": "env-key"})

    assert config.apikey == "env-key"
    assert config.base_url == "https://services.marinetraffic.com/api"
    assert config.timespan == 10
    assert config.vessel == 0
    assert config.rates == {"full": 60.0, "extended": 60.0, "simple": 120.0}
    assert config.retry.max_attempts == 5


def test_file_api_key_wins_over_environment(tmp_path: Path):
    config = load_bridge_config(_write(tmp_path, BASE_YAML), environ={"MARINETRAFFIC_API_KEY": "env-key"})
    assert config.apikey == "file-key"
    assert config.enabled_tiers() == ["extended", "simple"]


def test_missing_api_key_is_a_config_error(tmp_path: Path):
    base = _write(tmp_path, BASE_YAML.replace('"file-key"', '""'))
    with pytest.raises(ConfigError):
        load_bridge_config(base, environ={})


def test_missing_config_file_is_a_config_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_bridge_config(tmp_path, environ={})


def test_overlay_values_are_deep_merged(tmp_path: Path):
    base = _write(tmp_path / "base", BASE_YAML)
    overlay = _write(
        tmp_path / "overlay",
        """marinetraffic:
  vessel: 304010417
rates:
  full: 30
http:
  max_attempts: 2
""",
    )

    config = load_bridge_config(base, overlay_config_dir=overlay, environ={})

    assert config.vessel == 304010417
    assert config.apikey == "file-key"
    assert config.rates["full"] == 30.0
    assert config.rates["simple"] == 120.0
    assert config.retry.max_attempts == 2


def test_empty_overlay_file_is_ignored(tmp_path: Path):
    base = _write(tmp_path / "base", BASE_YAML)
    overlay = _write(tmp_path / "overlay", "")

    config = load_bridge_config(base, overlay_config_dir=overlay, environ={})
    assert config.rates["full"] == -1.0


def test_non_mapping_overlay_is_rejected(tmp_path: Path):
    base = _write(tmp_path / "base", BASE_YAML)
    overlay = _write(tmp_path / "overlay", "- not\n- a mapping\n")

    with pytest.raises(ConfigError):
        load_bridge_config(base, overlay_config_dir=overlay, environ={})
