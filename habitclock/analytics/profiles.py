"""Read-side views over a dense analytics array.

All views drop zero cells, so a control that never held a state (or never
saw a given transition) on a clock contributes nothing.
"""

import operator

import numpy as np

from habitclock.analytics.dense_array import ensure_array_shape, hold_block, trans_block, transition_pairs
from habitclock.clocks.types import ClockId
from habitclock.shared.time_of_day import aggregate_time_of_day


def _nonzero(block: np.ndarray) -> dict[int, float]:
    return {int(b): float(block[b]) for b in np.flatnonzero(block)}


def holding_by_bucket(array, num_states: int, clock) -> dict[int, dict[int, float]]:
    """``{state: {bucket: ms}}`` for one clock."""
    values = ensure_array_shape(array, num_states)
    result = {}
    for state in range(num_states):
        cells = _nonzero(hold_block(values, state, clock, num_states))
        if cells:
            result[state] = cells
    return result


def transitions_by_bucket(array, num_states: int, clock) -> dict[tuple[int, int], dict[int, float]]:
    """``{(from, to): {bucket: count}}`` for one clock."""
    values = ensure_array_shape(array, num_states)
    result = {}
    for pair in transition_pairs(num_states):
        cells = _nonzero(trans_block(values, pair[0], pair[1], clock, num_states))
        if cells:
            result[pair] = cells
    return result


def time_of_day_profile(array, num_states: int, clock) -> dict:
    """Holding and transition views folded from 2016 week buckets to 288 day buckets.

    Returns ``{"holding": {state: {day_bucket: ms}}, "transitions": {(from, to): {day_bucket: count}}}``.
    """
    return {
        "holding": {
            state: aggregate_time_of_day(cells, operator.add, 0.0)
            for state, cells in holding_by_bucket(array, num_states, clock).items()
        },
        "transitions": {
            pair: aggregate_time_of_day(cells, operator.add, 0.0)
            for pair, cells in transitions_by_bucket(array, num_states, clock).items()
        },
    }


def all_clocks_summary(array, num_states: int) -> dict[str, dict]:
    """Per-clock totals: holding ms per state and transition count per pair."""
    values = ensure_array_shape(array, num_states)
    summary = {}
    for clock in ClockId:
        holding = {state: float(hold_block(values, state, clock, num_states).sum()) for state in range(num_states)}
        transitions = {
            pair: float(trans_block(values, pair[0], pair[1], clock, num_states).sum())
            for pair in transition_pairs(num_states)
        }
        summary[clock.value] = {
            "holding_ms": holding,
            "total_holding_ms": sum(holding.values()),
            "transitions": {pair: count for pair, count in transitions.items() if count},
            "total_transitions": sum(transitions.values()),
        }
    return summary
