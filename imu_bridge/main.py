from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
import time
from typing import IO, Optional

import yaml

from .core.imu_plugin import ImuPlugin
from .core.sinks import JsonLinesSink, LoggingSink, Sink
from .core.types import BridgeConfig
from .mavlink import MavlinkSource
from .utils.logging_setup import setup_logging
from .utils.timesync import OffsetTimeSynchronizer

DEFAULT_CONFIG = os.path.join(os.path.dirname(__file__), "config", "default.yaml")


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Optional[str] = None) -> BridgeConfig:
    return BridgeConfig.model_validate(load_yaml(path or DEFAULT_CONFIG))


def build_bridge(cfg: BridgeConfig, sink: Sink) -> tuple[MavlinkSource, ImuPlugin]:
    """Wire a MAVLink source to an IMU plugin; the source's read thread drives the plugin."""
    source = MavlinkSource(
        cfg.mavlink.url,
        source_system=cfg.mavlink.source_system,
        source_component=cfg.mavlink.source_component,
        conn_timeout_s=cfg.mavlink.conn_timeout_s,
    )
    plugin = ImuPlugin(
        sink,
        cfg.imu,
        synchronizer=OffsetTimeSynchronizer(cfg.mavlink.time_offset_s),
        is_ardupilotmega=source.is_ardupilotmega,
    )
    source.subscribe(plugin.handle)
    source.add_connection_listener(plugin.connection_changed)
    return source, plugin


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="imu-bridge")
    sub = parser.add_subparsers(dest="cmd", required=True)
    runp = sub.add_parser("run", help="Normalize IMU telemetry from a MAVLink connection")
    runp.add_argument("--url", type=str, default=os.getenv("MAVLINK_URL", None), help="pymavlink connection string")
    runp.add_argument("--config", type=str, default=None, help="Path to default.yaml override")
    runp.add_argument("--log-level", type=str, default=os.getenv("LOG_LEVEL", None))
    runp.add_argument("--output", type=str, default=None, help="Write records as JSON lines ('-' for stdout)")
    runp.add_argument("--duration", type=float, default=None, help="Stop after this many seconds")

    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    if args.url:
        cfg.mavlink.url = args.url
    if args.log_level:
        cfg.logging.level = args.log_level

    setup_logging(cfg.logging.level, to_file=cfg.logging.to_file, log_dir=cfg.logging.log_dir)
    logger = logging.getLogger(__name__)

    out_stream: IO[str] | None = None
    sink: Sink
    if args.output == "-":
        sink = JsonLinesSink(sys.stdout)
    elif args.output:
        out_stream = open(args.output, "a", encoding="utf-8")
        sink = JsonLinesSink(out_stream)
    else:
        sink = LoggingSink()

    source, _ = build_bridge(cfg, sink)

    running = True

    def handle_sigint(signum, frame):  # noqa: ARG001
        nonlocal running
        running = False

    signal.signal(signal.SIGINT, handle_sigint)
    signal.signal(signal.SIGTERM, handle_sigint)

    source.start()
    logger.info("IMU bridge running on %s (frame_id=%s)", cfg.mavlink.url, cfg.imu.frame_id)
    started = time.monotonic()
    try:
        while running:
            if args.duration is not None and time.monotonic() - started >= args.duration:
                break
            time.sleep(0.1)
    finally:
        source.stop()
        if out_stream is not None:
            out_stream.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
