from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

import yaml

from telemetry.logger import TelemetryLogger
from telemetry.trace import load_trace, plot_trails

from .config import MissionConfig
from .errors import MissionIOError, RoverError
from .rover import Rover
from .satellite import RoverControlSatellite, format_rovers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mars-rover",
        description="Replay rover instructions over a plateau and report final positions.",
    )
    parser.add_argument("input_path", type=str, help="Path to the instructions file.")
    parser.add_argument(
        "-u",
        "--unbounded",
        action="store_true",
        default=None,
        help="Let rovers leave the plateau instead of failing the run.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Save the output to a file. By default it is printed to stdout.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to mission YAML config (e.g. configs/mission.yaml).",
    )
    parser.add_argument(
        "--telemetry",
        type=str,
        default=None,
        help="Append a JSONL trace of every rover step to this file.",
    )
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Render rover trails to this image (requires telemetry).",
    )
    return parser


def read_message(path: str) -> str:
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise MissionIOError("opening", exc) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MissionIOError("reading", exc) from exc


def write_output(output: str, path: Optional[str]) -> None:
    if path is None:
        print(output)
        return
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(output)
    except OSError as exc:
        raise MissionIOError("saving", exc) from exc


def run_mission(cfg: MissionConfig, input_path: str) -> List[Rover]:
    message = read_message(input_path)
    satellite = RoverControlSatellite

    if cfg.telemetry_path is None:
        rovers = satellite.parse_and_execute_incoming_message(message, cfg.unbounded)
        write_output(format_rovers(rovers), cfg.output_path)
        return rovers

    run_id = time.strftime("%Y%m%d-%H%M%S")
    boundary = None
    with TelemetryLogger(cfg.telemetry_path, run_id=run_id) as logger:
        try:
            plan = satellite.parse_message(message)
            boundary = plan.boundary
            rovers = satellite.execute_plan(plan, cfg.unbounded, logger.rover_step_callback())
        except RoverError as exc:
            logger.log_failure(exc)
            raise
        for rover in rovers:
            logger.log_rover_done(rover)

    write_output(format_rovers(rovers), cfg.output_path)

    if cfg.plot_path is not None:
        df = load_trace(cfg.telemetry_path)
        if not df.empty:
            df = df[df["run_id"] == run_id]
        plot_trails(df, cfg.plot_path, boundary=None if cfg.unbounded else boundary)
    return rovers


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = MissionConfig()
    if args.config is not None:
        try:
            cfg = MissionConfig.from_yaml(args.config)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            print(f"Rover Error - Issue whilst loading config '{args.config}': {exc}", file=sys.stderr)
            return 1
    cfg = cfg.with_overrides(
        unbounded=args.unbounded,
        output_path=args.output,
        telemetry_path=args.telemetry,
        plot_path=args.plot,
    )
    if cfg.plot_path is not None and cfg.telemetry_path is None:
        print("Rover Error - --plot needs a telemetry log path (--telemetry).", file=sys.stderr)
        return 1

    try:
        run_mission(cfg, args.input_path)
    except RoverError as exc:
        print(f"Rover Error - {exc.message()}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
