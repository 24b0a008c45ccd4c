"""Index arithmetic for the flat per-(control, model, window) analytics array.

Layout for a control with N states (G = 10080 values per group):

    [hold s=0][hold s=1]...[hold s=N-1][trans 0->1][trans 0->2]...[trans N-1->N-2]

Each group holds 5 clock blocks of 2016 buckets in canonical clock order
(utc, local, meanSolar, apparentSolar, unequalHours). Holding groups store
milliseconds; transition groups store counts. Self-transitions have no
group. The layout is the persisted format and is addressed positionally
by downstream consumers.
"""

import numpy as np

from habitclock.clocks.types import parse_clock_id
from habitclock.errors import ArrayShapeError, InvalidArgumentError
from habitclock.shared.checks import require_int_in_range
from habitclock.shared.constants import (
    BUCKETS_PER_WEEK,
    MAX_BUCKET_ID,
    MAX_RADIOBUTTON_STATES,
    MIN_BUCKET_ID,
    MIN_RADIOBUTTON_STATES,
    NUM_CLOCKS,
    VALUES_PER_GROUP,
)

DTYPE = np.float64


def _num_states(num_states) -> int:
    return require_int_in_range(num_states, "num_states", MIN_RADIOBUTTON_STATES, MAX_RADIOBUTTON_STATES)


def array_size(num_states: int) -> int:
    """Length of the dense array for a control with ``num_states`` states: N^2 * 10080."""
    n = _num_states(num_states)
    return n * n * VALUES_PER_GROUP


def clock_index(clock) -> int:
    """Canonical ordinal 0-4 of a clock given as ClockId, wire string or int."""
    if isinstance(clock, str):
        return parse_clock_id(clock).index
    return require_int_in_range(clock, "clock", 0, NUM_CLOCKS - 1)


def hold_index(state: int, clock, bucket: int, num_states: int) -> int:
    """Position of the holding-time cell for (state, clock, bucket)."""
    state = require_int_in_range(state, "state", 0, _num_states(num_states) - 1)
    bucket = require_int_in_range(bucket, "bucket", MIN_BUCKET_ID, MAX_BUCKET_ID)
    return state * VALUES_PER_GROUP + clock_index(clock) * BUCKETS_PER_WEEK + bucket


def trans_group_index(from_state: int, to_state: int, num_states: int) -> int:
    """Dense ordinal of the (from, to) pair among the N*(N-1) transition groups.

    ``from_state`` is the major axis; ``to_state`` skips the diagonal.
    """
    n = _num_states(num_states)
    from_state = require_int_in_range(from_state, "from_state", 0, n - 1)
    to_state = require_int_in_range(to_state, "to_state", 0, n - 1)
    if from_state == to_state:
        raise InvalidArgumentError(f"Self-transition {from_state}->{to_state} has no transition group")
    offset = to_state if to_state < from_state else to_state - 1
    return from_state * (n - 1) + offset


def trans_index(from_state: int, to_state: int, clock, bucket: int, num_states: int) -> int:
    """Position of the transition-count cell for (from, to, clock, bucket)."""
    group = trans_group_index(from_state, to_state, num_states)
    bucket = require_int_in_range(bucket, "bucket", MIN_BUCKET_ID, MAX_BUCKET_ID)
    return (num_states + group) * VALUES_PER_GROUP + clock_index(clock) * BUCKETS_PER_WEEK + bucket


def create_dense_array(num_states: int) -> np.ndarray:
    """Zero-filled float64 array of ``array_size(num_states)``."""
    return np.zeros(array_size(num_states), dtype=DTYPE)


def validate_array_size(array, num_states: int) -> bool:
    """True iff ``array`` has exactly the length required for ``num_states``."""
    return len(array) == array_size(num_states)


def ensure_array_shape(array, num_states: int) -> np.ndarray:
    """Return ``array`` as a 1-D float64 ndarray, or raise ArrayShapeError."""
    expected = array_size(num_states)
    values = np.asarray(array, dtype=DTYPE)
    if values.ndim != 1 or values.shape[0] != expected:
        raise ArrayShapeError(expected, int(values.size), num_states)
    return values


def hold_block(array: np.ndarray, state: int, clock, num_states: int) -> np.ndarray:
    """View of the 2016 holding cells of one state on one clock."""
    start = hold_index(state, clock, MIN_BUCKET_ID, num_states)
    return array[start : start + BUCKETS_PER_WEEK]


def trans_block(array: np.ndarray, from_state: int, to_state: int, clock, num_states: int) -> np.ndarray:
    """View of the 2016 transition-count cells of one ordered pair on one clock."""
    start = trans_index(from_state, to_state, clock, MIN_BUCKET_ID, num_states)
    return array[start : start + BUCKETS_PER_WEEK]


def transition_pairs(num_states: int) -> list[tuple[int, int]]:
    """All ordered (from, to) pairs in transition-group order."""
    n = _num_states(num_states)
    return [(f, t) for f in range(n) for t in range(n) if f != t]
