"""Seasonal windows: accumulated statistics are partitioned by UTC calendar quarter."""

import re
from datetime import UTC, datetime

from habitclock.clocks.utc import utc_datetime
from habitclock.errors import InvalidArgumentError

_WINDOW_RE = re.compile(r"^(\d{4})-Q([1-4])$")


def season_window_id(ts_ms) -> str:
    """Window identifier such as ``"2024-Q3"`` for the UTC quarter containing ``ts_ms``."""
    when = utc_datetime(ts_ms)
    return f"{when.year:04d}-Q{(when.month - 1) // 3 + 1}"


def season_window_bounds(window_id: str) -> tuple[int, int]:
    """Half-open ``(start_ms, end_ms)`` epoch range covered by a window id."""
    match = _WINDOW_RE.match(window_id)
    if not match:
        raise InvalidArgumentError(f"Malformed season window id {window_id!r}, expected 'YYYY-Qn'")
    year, quarter = int(match.group(1)), int(match.group(2))
    start = datetime(year, 3 * quarter - 2, 1, tzinfo=UTC)
    end = datetime(year + 1, 1, 1, tzinfo=UTC) if quarter == 4 else datetime(year, 3 * quarter + 1, 1, tzinfo=UTC)
    return int(start.timestamp()) * 1000, int(end.timestamp()) * 1000
