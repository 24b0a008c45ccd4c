"""Fold time-of-week buckets into time-of-day buckets."""

from collections.abc import Callable, Mapping
from typing import TypeVar

from habitclock.shared.constants import BUCKETS_PER_DAY, DAYS_PER_WEEK

V = TypeVar("V")


def aggregate_time_of_day(
    week_buckets: Mapping[int, V],
    combine: Callable[[V, V], V],
    zero: V,
) -> dict[int, V]:
    """Combine the 7 week buckets sharing each of the 288 day positions.

    Day position ``d`` collects week buckets ``d + 288 * day`` for
    day 0..6, skipping absent entries. A day position with no entries on
    any day is omitted from the result rather than emitted as ``zero``.

    Example:
        >>> aggregate_time_of_day({0: 1000, 288: 2000, 577: 5}, lambda a, b: a + b, 0)
        {0: 3000, 1: 5}
    """
    result: dict[int, V] = {}
    for day_bucket in range(BUCKETS_PER_DAY):
        total = zero
        seen = False
        for day in range(DAYS_PER_WEEK):
            value = week_buckets.get(day_bucket + BUCKETS_PER_DAY * day)
            if value is None:
                continue
            total = combine(total, value)
            seen = True
        if seen:
            result[day_bucket] = total
    return result
