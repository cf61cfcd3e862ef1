"""Shared rounding for every dosing output."""

import math


def round_to_2(value: float) -> float:
    """Round to 2 decimal places, halves rounding up.

    Works on ``value * 100`` so 4.5, 3.3 and friends come back exactly
    as written. Every formula in the dosing package rounds through here.
    """
    return math.floor(value * 100 + 0.5) / 100
