"""Conversions between (day of week, minute of day) and time-of-week bucket ids.

Day of week uses Monday = 0 ... Sunday = 6 (``datetime.weekday()``).
"""

from dataclasses import dataclass

from habitclock.shared.checks import require_int_in_range
from habitclock.shared.constants import (
    BUCKET_MINUTES,
    BUCKETS_PER_DAY,
    BUCKETS_PER_WEEK,
    DAYS_PER_WEEK,
    HALF_WEEK_BUCKETS,
    MAX_BUCKET_ID,
    MIN_BUCKET_ID,
    MINUTES_PER_DAY,
)


@dataclass(frozen=True)
class BucketSpan:
    """Day and minute range covered by one bucket."""

    day_of_week: int  # 0 = Monday, 6 = Sunday
    start_minute: int  # inclusive, 0-1435
    end_minute: int  # exclusive, 5-1440


def to_bucket(day_of_week: int, minute_of_day: int) -> int:
    """Convert a day of week and minute of day to a bucket id in [0, 2015].

    Minutes round down to their 5-minute slot: Monday 00:04 is bucket 0,
    Monday 00:05 is bucket 1.
    """
    day_of_week = require_int_in_range(day_of_week, "day_of_week", 0, DAYS_PER_WEEK - 1)
    minute_of_day = require_int_in_range(minute_of_day, "minute_of_day", 0, MINUTES_PER_DAY - 1)
    return day_of_week * BUCKETS_PER_DAY + minute_of_day // BUCKET_MINUTES


def from_bucket(bucket: int) -> BucketSpan:
    """Convert a bucket id to its day of week and [start, end) minute range."""
    bucket = require_int_in_range(bucket, "bucket", MIN_BUCKET_ID, MAX_BUCKET_ID)
    start_minute = (bucket % BUCKETS_PER_DAY) * BUCKET_MINUTES
    return BucketSpan(
        day_of_week=bucket // BUCKETS_PER_DAY,
        start_minute=start_minute,
        end_minute=start_minute + BUCKET_MINUTES,
    )


def cyclic_distance(a: int, b: int) -> int:
    """Shortest signed number of bucket steps from ``a`` to ``b`` around the week.

    Positive is forward in time. The result lies in [-1008, 1008]: a raw
    difference of exactly half a week keeps its sign.
    """
    a = require_int_in_range(a, "a", MIN_BUCKET_ID, MAX_BUCKET_ID)
    b = require_int_in_range(b, "b", MIN_BUCKET_ID, MAX_BUCKET_ID)
    diff = b - a
    if diff > HALF_WEEK_BUCKETS:
        diff -= BUCKETS_PER_WEEK
    elif diff < -HALF_WEEK_BUCKETS:
        diff += BUCKETS_PER_WEEK
    return diff


def next_bucket(bucket: int) -> int:
    """Cyclic successor of a bucket (2015 wraps to 0)."""
    bucket = require_int_in_range(bucket, "bucket", MIN_BUCKET_ID, MAX_BUCKET_ID)
    return (bucket + 1) % BUCKETS_PER_WEEK
