"""CLI entrypoint for the MarineTraffic to Signal K bridge."""

from __future__ import annotations

import argparse
import sys
from functools import partial
from pathlib import Path
from typing import TextIO

from ais_bridge.common.config_loader import load_bridge_config
from ais_bridge.common.constants import EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS, QUERY_TIERS
from ais_bridge.common.errors import BridgeError
from ais_bridge.common.fs import read_text
from ais_bridge.common.http import HttpClient
from ais_bridge.common.ids import generate_run_id
from ais_bridge.common.logging import build_logger, log_event
from ais_bridge.harvest.cycle import run_cycle
from ais_bridge.harvest.scheduler import PollScheduler, initial_tier
from ais_bridge.pipeline.delivery import StreamEventSink, deliver
from ais_bridge.pipeline.translate import translate_batch_with_report

COMMANDS = ("translate", "poll", "run")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--input", default="-", help="payload file for translate, '-' for stdin")
    parser.add_argument("--tier", default="auto", choices=["auto", *QUERY_TIERS])
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def _read_payload(source: str, stdin: TextIO) -> str:
    if source == "-":
        return stdin.read()
    return read_text(Path(source))


def run_command(args: argparse.Namespace, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir) if args.data_dir else None
    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    sink = StreamEventSink(stdout)

    if args.command == "translate":
        try:
            report = translate_batch_with_report(_read_payload(args.input, stdin), logger=logger)
        except BridgeError as exc:
            log_event(
                logger,
                f"translate failed: {exc}",
                run_id=run_id,
                stage="translate",
                event="STAGE_FAIL",
                status="error",
                error_code=exc.error_code,
            )
            return EXIT_HARD_FAIL
        delivered = deliver(report.events, sink)
        log_event(
            logger,
            "translate complete",
            run_id=run_id,
            stage="translate",
            event="STAGE_END",
            status="ok",
            records_in=report.records_in,
            events_out=delivered,
        )
        return EXIT_PARTIAL if report.api_error is not None else EXIT_SUCCESS

    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    config = load_bridge_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)

    with HttpClient(timeout=config.timeout, retry=config.retry) as client:
        cycle = partial(run_cycle, config=config, client=client, sink=sink, logger=logger, run_id=run_id)

        if args.command == "poll":
            tier = initial_tier(config) if args.tier == "auto" else args.tier
            result = cycle(tier)
            return EXIT_SUCCESS if result.ok else EXIT_PARTIAL

        scheduler = PollScheduler(config, cycle, logger)
        scheduler.start()
        try:
            scheduler.wait()
        except KeyboardInterrupt:
            log_event(logger, "stopping pollers", run_id=run_id, event="STOP", status="ok")
        finally:
            scheduler.stop(timeout=5)
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except BridgeError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
