import json
import logging
from pathlib import Path

from ais_bridge.common.constants import JSON_LOG_FIELDS
from ais_bridge.common.ids import generate_run_id
from ais_bridge.common.logging import JsonLineFormatter, build_logger, log_event
from ais_bridge.common.time_utils import utc_timestamp_zulu


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("run-")


def test_utc_timestamp_zulu_shape():
    value = utc_timestamp_zulu()
    assert value.endswith("Z")
    assert len(value) == len("2017-05-19T09:39:57.123Z")


def test_json_formatter_emits_stable_schema():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.tier = "full"
    record.events_out = 3

    payload = json.loads(JsonLineFormatter().format(record))

    assert set(JSON_LOG_FIELDS) <= set(payload)
    assert payload["message"] == "hello world"
    assert payload["tier"] == "full"
    assert payload["events_out"] == 3
    assert payload["error_code"] is None


def test_build_logger_writes_run_log_file(tmp_path: Path):
    logger = build_logger("run-log-test", data_dir=tmp_path, level="DEBUG")
    log_event(logger, "cycle done", tier="simple", event="CYCLE_END", status="ok")
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run_meta" / "run-log-test.log.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event"] == "CYCLE_END"
