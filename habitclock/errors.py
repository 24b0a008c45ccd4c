"""Exception taxonomy shared across habitclock layers.

Two conditions are deliberately NOT exceptions:
- a clock whose time of day is undefined at an instant (mappers return None)
- an empty or reversed holding interval (splitter returns an empty dict)
"""


class HabitclockError(Exception):
    """Base class for all habitclock errors."""


class OutOfRangeError(HabitclockError, ValueError):
    """A bucket id, day, minute, state or clock index is outside its range or not an integer."""


class InvalidArgumentError(HabitclockError, ValueError):
    """An argument is well-typed but not acceptable (self-transition, unknown policy, bad config)."""


class ArrayShapeError(HabitclockError):
    """A dense analytics array has the wrong length for its declared number of states.

    The array must not be read positionally. Recovery (usually re-zeroing)
    belongs to the aggregation layer.
    """

    def __init__(self, expected: int, actual: int, num_states: int):
        self.expected = expected
        self.actual = actual
        self.num_states = num_states
        super().__init__(
            f"Dense array length {actual} does not match {expected} expected for {num_states} states"
        )
