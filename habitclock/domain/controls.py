"""Control definitions: radiobuttons with 2-10 labelled states, and 6-state sliders."""

from dataclasses import dataclass
from enum import StrEnum

from habitclock.domain.slider import discretize
from habitclock.errors import InvalidArgumentError
from habitclock.shared.checks import require_int_in_range
from habitclock.shared.constants import MAX_RADIOBUTTON_STATES, MIN_RADIOBUTTON_STATES, SLIDER_NUM_STATES


class ControlKind(StrEnum):
    RADIOBUTTON = "radiobutton"
    SLIDER = "slider"


@dataclass(frozen=True)
class RadiobuttonDefinition:
    num_states: int
    labels: tuple[str, ...]
    kind: ControlKind = ControlKind.RADIOBUTTON


@dataclass(frozen=True)
class SliderDefinition:
    """Continuous in the UI, discretized into 6 states for analytics."""

    labels: tuple[str, ...] | None = None
    kind: ControlKind = ControlKind.SLIDER


ControlDefinition = RadiobuttonDefinition | SliderDefinition


def num_states(definition: ControlDefinition) -> int:
    if isinstance(definition, SliderDefinition):
        return SLIDER_NUM_STATES
    if isinstance(definition, RadiobuttonDefinition):
        return definition.num_states
    raise InvalidArgumentError(f"Unknown control definition type: {type(definition).__name__}")


def validate_control_definition(definition: ControlDefinition) -> list[str]:
    """Validate a control definition.

    Returns list of error strings (empty = valid).
    """
    errors = []
    if isinstance(definition, RadiobuttonDefinition):
        n = definition.num_states
        if isinstance(n, bool) or not isinstance(n, int) or not MIN_RADIOBUTTON_STATES <= n <= MAX_RADIOBUTTON_STATES:
            errors.append(
                f"Radiobutton num_states must be an integer in "
                f"[{MIN_RADIOBUTTON_STATES}, {MAX_RADIOBUTTON_STATES}], got {n!r}"
            )
        elif len(definition.labels) != n:
            errors.append(f"Radiobutton needs exactly {n} labels, got {len(definition.labels)}")
    elif isinstance(definition, SliderDefinition):
        if definition.labels is not None and len(definition.labels) != SLIDER_NUM_STATES:
            errors.append(f"Slider labels must have exactly {SLIDER_NUM_STATES} entries, got {len(definition.labels)}")
    else:
        errors.append(f"Unknown control definition type: {type(definition).__name__}")

    if not errors and definition.labels is not None:
        if any(not isinstance(label, str) or not label.strip() for label in definition.labels):
            errors.append("Labels must be non-empty strings")
    return errors


def validate_discrete_state(definition: ControlDefinition, state) -> list[str]:
    """Check that ``state`` is a legal discrete state for ``definition``."""
    n = num_states(definition)
    if isinstance(state, bool) or not isinstance(state, int):
        return [f"State must be an integer, got {state!r}"]
    if not 0 <= state < n:
        return [f"State {state} out of range [0, {n - 1}]"]
    return []


def discrete_state_for(definition: ControlDefinition, value, policy=None) -> int:
    """Analytics state for a control value.

    Radiobutton values are already states and are range-checked; slider
    values in [0, 1] are discretized under ``policy``, which is required.
    """
    if isinstance(definition, SliderDefinition):
        return discretize(value, policy)
    return require_int_in_range(value, "state", 0, num_states(definition) - 1)
