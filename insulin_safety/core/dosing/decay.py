"""Insulin activity decay model.

This is the single source of truth for how a dose's activity decays
over time. IOB aggregation, projections, and alerts all call through
calculate_decay_factor rather than reimplementing the curve.
"""

import math

from insulin_safety.core.dosing.constants import (
    DECAY_RATE_NUMERATOR,
    INSULIN_DURATIONS,
)
from insulin_safety.core.dosing.enums import InsulinType
from insulin_safety.core.dosing.exceptions import InvalidArgumentError


def calculate_decay_factor(hours_elapsed: float, duration: float) -> float:
    """Calculate the fraction of a dose still active after elapsed time.

    Uses an exponential decay with rate ``4 / duration``, which front-loads
    absorption compared with a linear ramp. The curve is cut to exactly
    zero once the action duration has passed.

    Args:
        hours_elapsed: Hours since the insulin was taken.
        duration: Total duration of insulin action in hours.

    Returns:
        Decay factor between 0.0 and 1.0.

    Raises:
        InvalidArgumentError: If either argument is not finite, hours_elapsed
            is negative, or duration is not positive.
    """
    if not math.isfinite(hours_elapsed):
        raise InvalidArgumentError("Hours elapsed must be a finite number")
    if not math.isfinite(duration):
        raise InvalidArgumentError("Duration must be a finite number")
    if hours_elapsed < 0:
        raise InvalidArgumentError("Hours elapsed cannot be negative")
    if duration <= 0:
        raise InvalidArgumentError("Duration must be positive")

    # Fully absorbed
    if hours_elapsed >= duration:
        return 0.0
    if hours_elapsed == 0:
        return 1.0

    decay_rate = DECAY_RATE_NUMERATOR / duration
    factor = math.exp(-decay_rate * hours_elapsed)

    return max(0.0, min(1.0, factor))


def get_insulin_duration(insulin_type: InsulinType | str) -> float:
    """Standard duration of insulin action for an insulin type.

    Args:
        insulin_type: An InsulinType or its string value.

    Returns:
        Duration in hours from INSULIN_DURATIONS.

    Raises:
        InvalidArgumentError: If the type is not a known insulin class.
    """
    try:
        key = InsulinType(insulin_type)
    except ValueError:
        raise InvalidArgumentError(f"Unknown insulin type: {insulin_type}") from None
    return INSULIN_DURATIONS[key]
