"""Ingest committed state changes into dense analytics arrays.

A committed change closes the holding interval of the previous state and,
when a person made the change, records one transition per clock:

    from_state held over [from_committed_at_ms, committed_at_ms)
        -> holding ms split into buckets on every clock
    user changed from_state -> to_state at committed_at_ms
        -> +1 in the (from, to) transition cell of that instant's bucket,
           on every clock where the instant is defined

Model-initiated changes only contribute holding time.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from numbers import Integral, Real

import numpy as np

from habitclock.analytics.dense_array import create_dense_array, hold_index, trans_index
from habitclock.clocks.dispatch import map_timestamp_to_bucket
from habitclock.clocks.solar import SolarProvider
from habitclock.clocks.types import ClockConfig, ClockId
from habitclock.errors import ArrayShapeError
from habitclock.measurement.season import season_window_id
from habitclock.measurement.split_interval import split_hold_interval

logger = logging.getLogger(__name__)


class Initiator(StrEnum):
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class CommittedChange:
    """One committed control change plus the commit it supersedes."""

    control_id: str
    model_id: str
    from_state: int
    from_committed_at_ms: int
    to_state: int
    committed_at_ms: int
    initiator: Initiator


def _is_integral(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Integral):
        return True
    return isinstance(value, Real) and math.isfinite(value) and float(value).is_integer()


def validate_change(change: CommittedChange, num_states: int) -> list[str]:
    """Integrity checks before a change may touch an array.

    Returns list of error strings (empty = valid).
    """
    errors = []

    for name in ("from_committed_at_ms", "committed_at_ms"):
        if not _is_integral(getattr(change, name)):
            errors.append(f"{name} must be a finite integer timestamp, got {getattr(change, name)!r}")
    if not errors and change.from_committed_at_ms >= change.committed_at_ms:
        errors.append(
            f"Holding interval is empty or reversed: "
            f"{change.from_committed_at_ms} >= {change.committed_at_ms}"
        )

    if not isinstance(change.model_id, str) or not change.model_id:
        errors.append("model_id is required")
    if not isinstance(change.control_id, str) or not change.control_id:
        errors.append("control_id is required")

    for name in ("from_state", "to_state"):
        state = getattr(change, name)
        if not _is_integral(state):
            errors.append(f"{name} must be an integer, got {state!r}")
        elif not 0 <= state < num_states:
            errors.append(f"{name} {state} out of range [0, {num_states - 1}]")

    try:
        Initiator(change.initiator)
    except ValueError:
        errors.append(f"Unknown initiator {change.initiator!r}")

    return errors


def compute_change_deltas(
    change: CommittedChange,
    num_states: int,
    config: ClockConfig,
    solar: SolarProvider | None = None,
) -> dict[int, float]:
    """Dense-array increments for one validated change, keyed by array index.

    Pure: nothing is read or written. The caller applies the result all at
    once, so a failure here leaves the array untouched.
    """
    t0_ms = int(change.from_committed_at_ms)
    t1_ms = int(change.committed_at_ms)
    from_state = int(change.from_state)
    to_state = int(change.to_state)
    deltas: dict[int, float] = {}

    for clock in ClockId:
        for bucket, ms in split_hold_interval(t0_ms, t1_ms, clock, config, solar).items():
            index = hold_index(from_state, clock, bucket, num_states)
            deltas[index] = deltas.get(index, 0.0) + ms

    if Initiator(change.initiator) is not Initiator.USER:
        return deltas
    if from_state == to_state:
        logger.debug("Same-state commit on %s (state %d); no transition recorded", change.control_id, from_state)
        return deltas

    for clock in ClockId:
        bucket = map_timestamp_to_bucket(clock, t1_ms, config, solar)
        if bucket is None:
            continue
        index = trans_index(from_state, to_state, clock, bucket, num_states)
        deltas[index] = deltas.get(index, 0.0) + 1.0
    return deltas


def apply_deltas(array: np.ndarray, deltas: dict[int, float]) -> np.ndarray:
    """Add ``deltas`` into ``array`` in place and return it."""
    if deltas:
        indices = np.fromiter(deltas.keys(), dtype=np.intp, count=len(deltas))
        values = np.fromiter(deltas.values(), dtype=array.dtype, count=len(deltas))
        array[indices] += values
    return array


class ChangeRecorder:
    """Applies committed changes to stored arrays, one change at a time.

    Reads, updates and saves under a lock so concurrent ``record`` calls on
    one recorder never interleave their read-modify-write cycles.
    """

    def __init__(self, store, config: ClockConfig, solar: SolarProvider | None = None):
        self.store = store
        self.config = config
        self.solar = solar
        self._lock = asyncio.Lock()

    async def _load_or_create(self, control_id: str, model_id: str, window_id: str, num_states: int) -> np.ndarray:
        try:
            array = await self.store.load(control_id, model_id, window_id, num_states)
        except ArrayShapeError as e:
            logger.warning("Re-zeroing %s/%s/%s: %s", control_id, model_id, window_id, e)
            return create_dense_array(num_states)
        if array is None:
            return create_dense_array(num_states)
        return array

    async def record(self, change: CommittedChange, num_states: int) -> bool:
        """Ingest one change. Returns False if it was discarded as invalid."""
        errors = validate_change(change, num_states)
        if errors:
            logger.error("Discarding committed change for %s: %s", change.control_id, "; ".join(errors))
            return False

        window_id = season_window_id(change.committed_at_ms)
        deltas = compute_change_deltas(change, num_states, self.config, self.solar)
        async with self._lock:
            array = await self._load_or_create(change.control_id, change.model_id, window_id, num_states)
            apply_deltas(array, deltas)
            await self.store.save(change.control_id, change.model_id, window_id, num_states, array)

        logger.debug(
            "Recorded %s change on %s/%s in %s: %d cells updated",
            change.initiator,
            change.control_id,
            change.model_id,
            window_id,
            len(deltas),
        )
        return True
