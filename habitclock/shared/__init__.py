"""Time-of-week bucket arithmetic and shared constants."""

from habitclock.shared.bucket import BucketSpan, cyclic_distance, from_bucket, to_bucket
from habitclock.shared.time_of_day import aggregate_time_of_day

__all__ = [
    "BucketSpan",
    "aggregate_time_of_day",
    "cyclic_distance",
    "from_bucket",
    "to_bucket",
]
