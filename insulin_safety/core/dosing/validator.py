"""Clinical input validator.

Range-checks calculator inputs before they reach dosing arithmetic.
These bounds are safety rails, not UI limits: physiologically
implausible values are refused regardless of which caller supplied
them.

IMPORTANT: This validator is a software safety layer -- it does NOT
replace clinical judgment.
"""

import math
from typing import Final, NamedTuple

from insulin_safety.core.dosing.constants import (
    MAX_CARBS_GRAMS,
    MAX_CORRECTION_FACTOR,
    MAX_CURRENT_GLUCOSE_MGDL,
    MAX_INSULIN_TO_CARB,
    MAX_TARGET_GLUCOSE_MGDL,
    MIN_CARBS_GRAMS,
    MIN_CORRECTION_FACTOR,
    MIN_CURRENT_GLUCOSE_MGDL,
    MIN_INSULIN_TO_CARB,
    MIN_TARGET_GLUCOSE_MGDL,
)
from insulin_safety.core.dosing.exceptions import InvalidArgumentError


class InputBound(NamedTuple):
    """Inclusive clinical range for one calculator field."""

    minimum: float
    maximum: float
    message: str


# Checked in this order; the first violation raises.
CALCULATION_INPUT_BOUNDS: Final[dict[str, InputBound]] = {
    "carbs": InputBound(
        MIN_CARBS_GRAMS,
        MAX_CARBS_GRAMS,
        f"Carbs must be between {MIN_CARBS_GRAMS:g} and {MAX_CARBS_GRAMS:g} grams",
    ),
    "current_glucose": InputBound(
        MIN_CURRENT_GLUCOSE_MGDL,
        MAX_CURRENT_GLUCOSE_MGDL,
        f"Current glucose must be between {MIN_CURRENT_GLUCOSE_MGDL:g} "
        f"and {MAX_CURRENT_GLUCOSE_MGDL:g} mg/dL",
    ),
    "target_glucose": InputBound(
        MIN_TARGET_GLUCOSE_MGDL,
        MAX_TARGET_GLUCOSE_MGDL,
        f"Target glucose must be between {MIN_TARGET_GLUCOSE_MGDL:g} "
        f"and {MAX_TARGET_GLUCOSE_MGDL:g} mg/dL",
    ),
    "insulin_to_carb": InputBound(
        MIN_INSULIN_TO_CARB,
        MAX_INSULIN_TO_CARB,
        f"Insulin-to-carb ratio must be between {MIN_INSULIN_TO_CARB:g} "
        f"and {MAX_INSULIN_TO_CARB:g}",
    ),
    "correction_factor": InputBound(
        MIN_CORRECTION_FACTOR,
        MAX_CORRECTION_FACTOR,
        f"Correction factor must be between {MIN_CORRECTION_FACTOR:g} "
        f"and {MAX_CORRECTION_FACTOR:g}",
    ),
}


def validate_calculation_inputs(
    *,
    carbs: float | None = None,
    current_glucose: float | None = None,
    target_glucose: float | None = None,
    insulin_to_carb: float | None = None,
    correction_factor: float | None = None,
) -> None:
    """Validate calculator inputs against their clinical ranges.

    Every field is optional. Only the fields provided are checked, which
    supports validating a multi-field form while the user fills it in.

    Raises:
        InvalidArgumentError: Naming the first field outside its range.
    """
    values = {
        "carbs": carbs,
        "current_glucose": current_glucose,
        "target_glucose": target_glucose,
        "insulin_to_carb": insulin_to_carb,
        "correction_factor": correction_factor,
    }

    for field, bound in CALCULATION_INPUT_BOUNDS.items():
        value = values[field]
        if value is None:
            continue
        # NaN fails every comparison, so test for it explicitly
        if not math.isfinite(value) or not bound.minimum <= value <= bound.maximum:
            raise InvalidArgumentError(bound.message)
