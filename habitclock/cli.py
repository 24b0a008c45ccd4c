"""Command-line entry point: ``habitclock map|split|profile``."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from datetime import UTC, datetime

from habitclock.analytics.profiles import time_of_day_profile
from habitclock.clocks.dispatch import map_all_clocks
from habitclock.clocks.types import ClockId, parse_clock_id
from habitclock.config import AppConfig
from habitclock.errors import HabitclockError
from habitclock.measurement.season import season_window_id
from habitclock.measurement.split_interval import split_hold_interval_all_clocks
from habitclock.shared.bucket import from_bucket
from habitclock.storage.blob_store import DenseArrayStore

logger = logging.getLogger("habitclock.cli")

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def parse_instant(value: str) -> int:
    """Epoch milliseconds from an integer string or an ISO-8601 timestamp (naive = UTC)."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        when = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not epoch ms or ISO-8601: {value!r}") from None
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return int(when.timestamp() * 1000)


def describe_bucket(bucket: int | None) -> str:
    if bucket is None:
        return "undefined"
    span = from_bucket(bucket)
    hh, mm = divmod(span.start_minute, 60)
    return f"{bucket:4d}  {_DAY_NAMES[span.day_of_week]} {hh:02d}:{mm:02d}"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habitclock",
        description="Multi-clock time-of-week analytics for discrete controls",
    )
    parser.add_argument("--timezone", help="IANA timezone for the local clock (default: $HABITCLOCK_TIMEZONE or UTC)")
    parser.add_argument("--latitude", type=float, help="Latitude in degrees, north positive")
    parser.add_argument("--longitude", type=float, help="Longitude in degrees, east positive")
    parser.add_argument("--json", dest="json_output", action="store_true", help="Output JSON")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")

    subparsers = parser.add_subparsers(dest="command")

    map_parser = subparsers.add_parser("map", help="Show the bucket of an instant on every clock")
    map_parser.add_argument("timestamp", type=parse_instant, help="Epoch ms or ISO-8601 instant")

    split_parser = subparsers.add_parser("split", help="Split a holding interval into buckets on every clock")
    split_parser.add_argument("start", type=parse_instant)
    split_parser.add_argument("end", type=parse_instant)

    profile_parser = subparsers.add_parser("profile", help="Time-of-day holding profile from the store")
    profile_parser.add_argument("--control", required=True)
    profile_parser.add_argument("--model", required=True)
    profile_parser.add_argument("--window", help="Season window, e.g. 2024-Q3 (default: current quarter)")
    profile_parser.add_argument("--clock", default=ClockId.LOCAL.value, choices=[c.value for c in ClockId])

    return parser


def _configure_logging(args) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load_config(args) -> AppConfig:
    config = AppConfig.from_env()
    overrides = {
        name: getattr(args, name)
        for name in ("timezone", "latitude", "longitude")
        if getattr(args, name) is not None
    }
    if overrides:
        config.clock = replace(config.clock, **overrides)
    return config


def _cmd_map(args, config: AppConfig) -> int:
    buckets = map_all_clocks(args.timestamp, config.clock)
    if args.json_output:
        print(json.dumps({clock.value: bucket for clock, bucket in buckets.items()}, indent=2))
    else:
        for clock, bucket in buckets.items():
            print(f"{clock.value:<14} {describe_bucket(bucket)}")
    return 0


def _cmd_split(args, config: AppConfig) -> int:
    allocations = split_hold_interval_all_clocks(args.start, args.end, config.clock)
    if args.json_output:
        print(json.dumps({clock.value: alloc for clock, alloc in allocations.items()}, indent=2, sort_keys=True))
        return 0
    elapsed = max(0, args.end - args.start)
    for clock, alloc in allocations.items():
        total = sum(alloc.values())
        print(f"{clock.value:<14} {total:>12d} ms of {elapsed} in {len(alloc)} buckets")
    return 0


async def _load_profile(args, config: AppConfig):
    window_id = args.window or season_window_id(int(datetime.now(UTC).timestamp() * 1000))
    store = DenseArrayStore(str(config.store.db_path), chunk_size=config.store.chunk_size)
    await store.initialize()
    try:
        keys = await store.list_keys(args.control)
        match = [k for k in keys if k["model_id"] == args.model and k["window_id"] == window_id]
        if not match:
            return window_id, None
        num_states = match[0]["num_states"]
        array = await store.load(args.control, args.model, window_id, num_states)
        return window_id, time_of_day_profile(array, num_states, parse_clock_id(args.clock))
    finally:
        await store.close()


def _cmd_profile(args, config: AppConfig) -> int:
    window_id, profile = asyncio.run(_load_profile(args, config))
    if profile is None:
        logger.error("No data stored for %s/%s in %s", args.control, args.model, window_id)
        return 1
    if args.json_output:
        payload = {
            "window": window_id,
            "clock": args.clock,
            "holding": {str(s): cells for s, cells in profile["holding"].items()},
            "transitions": {f"{f}->{t}": cells for (f, t), cells in profile["transitions"].items()},
        }
        print(json.dumps(payload, indent=2))
        return 0
    print(f"{args.control}/{args.model} {window_id} on {args.clock} clock")
    for state, cells in sorted(profile["holding"].items()):
        peak = max(cells, key=cells.get)
        hh, mm = divmod(peak * 5, 60)
        print(f"  state {state}: {sum(cells.values()) / 3_600_000:.2f} h, busiest at {hh:02d}:{mm:02d}")
    return 0


_COMMANDS = {
    "map": _cmd_map,
    "split": _cmd_split,
    "profile": _cmd_profile,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args)
    config = _load_config(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error("Invalid configuration: %s", error)
        return 2

    try:
        return _COMMANDS[args.command](args, config)
    except HabitclockError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
