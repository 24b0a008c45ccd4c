"""Civil (wall clock) time in the configured IANA timezone."""

from habitclock.clocks.types import ClockConfig
from habitclock.clocks.utc import utc_datetime
from habitclock.shared.bucket import to_bucket


def map_local_to_bucket(ts_ms, config: ClockConfig) -> int:
    """Map an instant to the wall-clock bucket in ``config.timezone``. Always defined.

    The instant is converted with the UTC offset in force at that instant,
    so DST edges never raise:
    - spring forward: no instant falls in the skipped wall-clock hour; the
      transition instant itself already reads the post-transition time
      (01:59:59 EST is followed by 03:00:00 EDT), so the skipped buckets
      simply receive nothing.
    - fall back: the first pass through the repeated hour reads the earlier
      (pre-transition) offset, the second pass the later one; both passes
      land in the same wall-clock buckets.
    """
    wall = utc_datetime(ts_ms).astimezone(config.zone)
    return to_bucket(wall.weekday(), wall.hour * 60 + wall.minute)
