"""
Argument checks shared by the contour functions and the tone session.
"""
import math
import numbers
from typing import Any

from loudness_engine.exceptions import InvalidInputError


def is_real_number(value: Any) -> bool:
    """True for real numbers (numpy scalars included), excluding bools."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def require_finite(value: Any, name: str) -> float:
    """Return value as a float, rejecting non-numbers, NaN and infinities."""
    if not is_real_number(value):
        raise InvalidInputError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value}")
    return value


def require_frequency(frequency: Any) -> float:
    """Return frequency as a float, rejecting anything not finite and positive."""
    frequency = require_finite(frequency, "frequency")
    if frequency <= 0:
        raise InvalidInputError(f"frequency must be positive, got {frequency}")
    return frequency
