"""Discretize continuous slider positions into the 6 analytics states.

    0            -> state 0
    (0, 0.25)    -> state 1
    (0.25, 0.5)  -> state 2
    (0.5, 0.75)  -> state 3
    (0.75, 1)    -> state 4
    1            -> state 5

The exact boundaries 0.25, 0.5 and 0.75 are resolved by a
SliderBoundaryPolicy. There is no default policy; callers must choose one.
"""

import math
from enum import StrEnum
from numbers import Real

from habitclock.errors import InvalidArgumentError, OutOfRangeError
from habitclock.shared.checks import require_int_in_range
from habitclock.shared.constants import SLIDER_NUM_STATES


class SliderBoundaryPolicy(StrEnum):
    ROUND_DOWN = "roundDown"
    ROUND_UP = "roundUp"
    ROUND_NEAREST = "roundNearest"  # ties go to the lower state
    ROUND_NEAREST_TIES_UP = "roundNearestTiesUp"


# Midpoint of each state's interval; the end states are single points.
STATE_CENTERS: tuple[float, ...] = (0.0, 0.125, 0.375, 0.625, 0.875, 1.0)

# (boundary value, state below, state above)
_BOUNDARIES = ((0.25, 1, 2), (0.5, 2, 3), (0.75, 3, 4))


def parse_policy(policy) -> SliderBoundaryPolicy:
    """Coerce a policy name into SliderBoundaryPolicy; None and unknown names are errors."""
    if policy is None:
        raise InvalidArgumentError("A slider boundary policy is required; there is no default")
    try:
        return SliderBoundaryPolicy(policy)
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown slider boundary policy {policy!r}. Available: {[p.value for p in SliderBoundaryPolicy]}"
        ) from None


def validate_slider_value(value) -> float:
    """Return ``value`` as a float in [0, 1], or raise OutOfRangeError."""
    if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
        raise OutOfRangeError(f"Slider value must be a number in [0, 1], got {value!r}")
    value = float(value)
    if value < 0.0 or value > 1.0:
        raise OutOfRangeError(f"Slider value must be in [0, 1], got {value}")
    return value


def state_center(state: int) -> float:
    state = require_int_in_range(state, "state", 0, SLIDER_NUM_STATES - 1)
    return STATE_CENTERS[state]


def _resolve_boundary(value: float, lower: int, upper: int, policy: SliderBoundaryPolicy) -> int:
    if policy is SliderBoundaryPolicy.ROUND_DOWN:
        return lower
    if policy is SliderBoundaryPolicy.ROUND_UP:
        return upper
    to_lower = abs(value - STATE_CENTERS[lower])
    to_upper = abs(value - STATE_CENTERS[upper])
    if to_lower < to_upper:
        return lower
    if to_upper < to_lower:
        return upper
    return upper if policy is SliderBoundaryPolicy.ROUND_NEAREST_TIES_UP else lower


def discretize(value, policy) -> int:
    """Map a slider position in [0, 1] to a discrete state in [0, 5].

    Only the three interior boundaries depend on ``policy``; the end points
    and the open quartiles never do.
    """
    policy = parse_policy(policy)
    value = validate_slider_value(value)
    if value == 0.0:
        return 0
    if value == 1.0:
        return SLIDER_NUM_STATES - 1
    for boundary, lower, upper in _BOUNDARIES:
        if value < boundary:
            return lower
        if value == boundary:
            return _resolve_boundary(value, lower, upper, policy)
    return _BOUNDARIES[-1][2]
