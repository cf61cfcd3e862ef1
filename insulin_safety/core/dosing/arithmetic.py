"""Dose arithmetic.

Carb coverage, correction dose, and IOB-adjusted total dose. Each term
is a separate function with its own input checks so callers can mix
manual overrides and partial recalculation, and so every clinical
factor can be verified in isolation.
"""

import math

from insulin_safety.core.dosing.exceptions import InvalidArgumentError
from insulin_safety.core.dosing.rounding import round_to_2


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidArgumentError(f"{name} must be a finite number")


def calculate_carb_coverage(carbs: float, insulin_to_carb: float) -> float:
    """Units of insulin needed to cover a carbohydrate load.

    Args:
        carbs: Grams of carbohydrate.
        insulin_to_carb: Grams covered by one unit (e.g. 10 for 1:10).

    Returns:
        Units of insulin, rounded to 2 decimal places.
    """
    _require_finite(carbs=carbs, insulin_to_carb=insulin_to_carb)
    if carbs < 0:
        raise InvalidArgumentError("Carbs cannot be negative")
    if insulin_to_carb <= 0:
        raise InvalidArgumentError("Insulin-to-carb ratio must be positive")

    return round_to_2(carbs / insulin_to_carb)


def calculate_correction_dose(
    current_glucose: float,
    target_glucose: float,
    correction_factor: float,
) -> float:
    """Units of insulin needed to bring glucose down to target.

    Glucose at or below target yields exactly 0; a correction is never
    negative.

    Args:
        current_glucose: Current blood glucose (mg/dL).
        target_glucose: Target blood glucose (mg/dL).
        correction_factor: mg/dL drop produced by one unit.

    Returns:
        Units of insulin, rounded to 2 decimal places.
    """
    _require_finite(
        current_glucose=current_glucose,
        target_glucose=target_glucose,
        correction_factor=correction_factor,
    )
    if current_glucose < 0 or target_glucose < 0:
        raise InvalidArgumentError("Glucose values cannot be negative")
    if correction_factor <= 0:
        raise InvalidArgumentError("Correction factor must be positive")

    glucose_difference = max(0.0, current_glucose - target_glucose)
    return round_to_2(glucose_difference / correction_factor)


def calculate_total_dose(
    carb_coverage: float,
    correction_dose: float,
    current_iob: float,
) -> float:
    """Recommended dose after subtracting insulin already on board.

    IOB can offset the dose completely but never turns it negative.

    Args:
        carb_coverage: Units for carbohydrate coverage.
        correction_dose: Units for glucose correction.
        current_iob: Insulin on board in units.

    Returns:
        Adjusted dose in units, rounded to 2 decimal places.
    """
    _require_finite(
        carb_coverage=carb_coverage,
        correction_dose=correction_dose,
        current_iob=current_iob,
    )
    if carb_coverage < 0 or correction_dose < 0 or current_iob < 0:
        raise InvalidArgumentError("All dose values must be non-negative")

    total_before_iob = carb_coverage + correction_dose
    return round_to_2(max(0.0, total_before_iob - current_iob))
