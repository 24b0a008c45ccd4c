"""Argument checks for the integer-only arithmetic layers."""

from numbers import Integral

from habitclock.errors import OutOfRangeError


def require_int_in_range(value, name: str, low: int, high: int) -> int:
    """Return ``value`` as an int if it is an integer in ``[low, high]``.

    ``bool`` is rejected even though it subclasses ``int``. Floats are
    rejected even when integral: callers pass bucket ids and states, not
    measurements, and silent coercion would hide bugs.
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise OutOfRangeError(f"{name} must be an integer in range [{low}, {high}], got {value!r}")
    value = int(value)
    if value < low or value > high:
        raise OutOfRangeError(f"{name} must be an integer in range [{low}, {high}], got {value}")
    return value


def require_timestamp(value, name: str) -> int:
    """Return ``value`` as int epoch milliseconds; reject bools, floats and non-numbers."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise OutOfRangeError(f"{name} must be integer epoch milliseconds, got {value!r}")
    return int(value)
