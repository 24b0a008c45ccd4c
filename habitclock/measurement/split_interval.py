"""Split a holding interval into time-of-week bucket allocations for one clock."""

import logging

from habitclock.clocks.dispatch import bind_mapper
from habitclock.clocks.solar import SolarProvider
from habitclock.clocks.types import ClockConfig, ClockId, parse_clock_id
from habitclock.measurement.search import Mapping, find_bucket_end, find_next_defined
from habitclock.shared.checks import require_timestamp

logger = logging.getLogger(__name__)

UNIFORM_STEP_MS = 30_000
UNEQUAL_HOURS_STEP_MS = 60_000
MAX_SEGMENTS = 500_000


def allocate_interval(
    mapping: Mapping,
    t0_ms: int,
    t1_ms: int,
    step_ms: int = UNIFORM_STEP_MS,
    adaptive: bool = False,
) -> dict[int, int]:
    """Walk ``[t0_ms, t1_ms)`` bucket by bucket and total the milliseconds in each.

    Undefined stretches are skipped. If no defined instant turns up before
    ``t1_ms`` (or within a day of lookahead), the walk stops and whatever has
    been collected is returned.
    """
    allocation: dict[int, int] = {}
    current = t0_ms
    segments = 0
    while current < t1_ms:
        if segments >= MAX_SEGMENTS:
            logger.warning("Interval walk stopped after %d segments at %s (end %s)", segments, current, t1_ms)
            break
        segments += 1

        bucket = mapping(current)
        if bucket is None:
            resume = find_next_defined(mapping, current, t1_ms)
            if resume is None:
                logger.debug("Clock undefined from %s with no defined instant ahead before %s", current, t1_ms)
                break
            logger.debug("Skipped undefined stretch [%s, %s)", current, resume)
            current = resume
            continue

        end = find_bucket_end(mapping, current, bucket, t1_ms, step_ms, adaptive=adaptive)
        if end <= current:
            logger.warning("Bucket-end search made no progress at %s for bucket %d", current, bucket)
            break
        end = min(end, t1_ms)
        allocation[bucket] = allocation.get(bucket, 0) + (end - current)
        current = end
    return allocation


def split_hold_interval(
    t0_ms: int,
    t1_ms: int,
    clock_id: ClockId | str,
    config: ClockConfig,
    solar: SolarProvider | None = None,
) -> dict[int, int]:
    """Milliseconds of ``[t0_ms, t1_ms)`` falling in each bucket of ``clock_id``.

    Returns an empty dict for an empty or reversed interval. Where the clock
    is defined throughout, the values sum to exactly ``t1_ms - t0_ms``.
    """
    t0_ms = require_timestamp(t0_ms, "t0_ms")
    t1_ms = require_timestamp(t1_ms, "t1_ms")
    clock_id = parse_clock_id(clock_id)
    if t0_ms >= t1_ms:
        return {}

    adaptive = clock_id is ClockId.UNEQUAL_HOURS
    return allocate_interval(
        bind_mapper(clock_id, config, solar),
        t0_ms,
        t1_ms,
        step_ms=UNEQUAL_HOURS_STEP_MS if adaptive else UNIFORM_STEP_MS,
        adaptive=adaptive,
    )


def split_hold_interval_all_clocks(
    t0_ms: int,
    t1_ms: int,
    config: ClockConfig,
    solar: SolarProvider | None = None,
) -> dict[ClockId, dict[int, int]]:
    """``split_hold_interval`` for every clock, in canonical order."""
    return {clock: split_hold_interval(t0_ms, t1_ms, clock, config, solar) for clock in ClockId}
