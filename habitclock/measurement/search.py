"""Bounded boundary search over a timestamp -> bucket mapping.

Every function here works on an arbitrary ``mapping(ts_ms) -> bucket | None``
so the search can be exercised with synthetic mappings, independent of any
real clock. All positions are integer epoch milliseconds.

Loops are bounded twice: by a lookahead horizon (24 hours by default) and
by ``MAX_SEARCH_PROBES`` mapping evaluations per call.
"""

import logging
from collections.abc import Callable

from habitclock.shared.bucket import next_bucket
from habitclock.shared.constants import MS_PER_DAY, MS_PER_MINUTE

logger = logging.getLogger(__name__)

Mapping = Callable[[int], int | None]

DEFAULT_LOOKAHEAD_MS = MS_PER_DAY
DEFAULT_DEFINED_STEP_MS = MS_PER_MINUTE
MAX_SEARCH_PROBES = 20_000


def bisect_boundary(predicate: Callable[[int], bool], low_ms: int, high_ms: int) -> int:
    """Smallest millisecond in ``(low_ms, high_ms]`` where ``predicate`` holds.

    Requires ``predicate(low_ms)`` false and ``predicate(high_ms)`` true, and
    assumes a single false -> true switch inside the bracket.
    """
    while high_ms - low_ms > 1:
        mid = (low_ms + high_ms) // 2
        if predicate(mid):
            high_ms = mid
        else:
            low_ms = mid
    return high_ms


def find_next_defined(
    mapping: Mapping,
    start_ms: int,
    limit_ms: int,
    step_ms: int = DEFAULT_DEFINED_STEP_MS,
    max_lookahead_ms: int = DEFAULT_LOOKAHEAD_MS,
) -> int | None:
    """First millisecond at or after ``start_ms`` where ``mapping`` is defined.

    Probes forward in ``step_ms`` strides and bisects back once a defined
    probe is found. Returns None when nothing is defined before ``limit_ms``
    or within ``max_lookahead_ms``.
    """
    if mapping(start_ms) is not None:
        return start_ms

    horizon = min(limit_ms, start_ms + max_lookahead_ms)
    low = start_ms
    probes = 0
    while low < horizon:
        if probes >= MAX_SEARCH_PROBES:
            logger.warning("Defined-instant search hit %d probes from %s; giving up", probes, start_ms)
            return None
        probe = min(low + step_ms, horizon)
        probes += 1
        if mapping(probe) is not None:
            found = bisect_boundary(lambda t: mapping(t) is not None, low, probe)
            return found if found < limit_ms else None
        low = probe
    return None


def find_bucket_end(
    mapping: Mapping,
    start_ms: int,
    bucket: int,
    limit_ms: int,
    step_ms: int,
    adaptive: bool = False,
    min_step_ms: int = 1,
    max_lookahead_ms: int = DEFAULT_LOOKAHEAD_MS,
) -> int:
    """First millisecond after ``start_ms`` whose mapping is not ``bucket``.

    ``mapping(start_ms)`` must equal ``bucket``. The result is capped at
    ``min(limit_ms, start_ms + max_lookahead_ms)`` when ``bucket`` lasts at
    least that long.

    With ``adaptive`` set, a probe that lands on anything other than
    ``bucket`` or its cyclic successor (including an undefined instant)
    halves the stride and retries from the last in-bucket position, down to
    ``min_step_ms``. A bucket shorter than the stride can then never be
    stepped over unseen.
    """
    horizon = min(limit_ms, start_ms + max_lookahead_ms)
    successor = next_bucket(bucket)
    low = start_ms
    step = step_ms
    probes = 0
    while low < horizon:
        if probes >= MAX_SEARCH_PROBES:
            logger.warning("Bucket-end search for bucket %d hit %d probes from %s", bucket, probes, start_ms)
            return low
        probe = min(low + step, horizon)
        probes += 1
        value = mapping(probe)
        if value == bucket:
            low = probe
            continue
        if adaptive and value != successor and step > min_step_ms:
            step = max(min_step_ms, step // 2)
            continue
        return bisect_boundary(lambda t: mapping(t) != bucket, low, probe)
    return horizon
