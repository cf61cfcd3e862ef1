"""Dosing clinical constants.

All clinically significant values are defined here with documented
rationale. These are DEFAULTS -- user-configurable settings override
where applicable (e.g., rapid and short acting durations come from
the user's CalculatorSettings, not from here).
"""

from typing import Final

from insulin_safety.core.dosing.enums import InsulinType

# Standard duration of insulin action (hours) by insulin type.
# rapid: Humalog, Novolog, Apidra (3-4 h)
# short: Regular insulin (5-6 h)
# intermediate: NPH (12-18 h)
# long: Lantus, Levemir, Tresiba (24+ h)
INSULIN_DURATIONS: Final[dict[InsulinType, float]] = {
    InsulinType.rapid: 4.0,
    InsulinType.short: 6.0,
    InsulinType.intermediate: 16.0,
    InsulinType.long: 24.0,
}

# Decay model: remaining = exp(-(DECAY_RATE_NUMERATOR / duration) * t).
# Existing recommendations depend on this exact curve; changing it is a
# clinical-algorithm decision.
DECAY_RATE_NUMERATOR: Final[float] = 4.0

# Clinical input bounds (inclusive). Values outside are physiologically
# implausible and are refused before any dosing arithmetic.
MIN_CARBS_GRAMS: Final[float] = 0
MAX_CARBS_GRAMS: Final[float] = 500
MIN_CURRENT_GLUCOSE_MGDL: Final[float] = 20
MAX_CURRENT_GLUCOSE_MGDL: Final[float] = 600
MIN_TARGET_GLUCOSE_MGDL: Final[float] = 70
MAX_TARGET_GLUCOSE_MGDL: Final[float] = 180
MIN_INSULIN_TO_CARB: Final[float] = 1
MAX_INSULIN_TO_CARB: Final[float] = 50
MIN_CORRECTION_FACTOR: Final[float] = 10
MAX_CORRECTION_FACTOR: Final[float] = 200

# Calculator defaults used when a user has not customised their settings.
DEFAULT_INSULIN_TO_CARB: Final[float] = 15
DEFAULT_CORRECTION_FACTOR: Final[float] = 50
DEFAULT_TARGET_GLUCOSE_MGDL: Final[float] = 100

# Risk baseline. Below HYPOGLYCEMIA_RISK_GLUCOSE_MGDL any further insulin
# carries a high hypoglycemia risk. Between that and CAUTION_GLUCOSE_MGDL a
# dose above CAUTION_DOSE_UNITS is flagged, as is IOB above
# IOB_CAUTION_UNITS regardless of glucose.
HYPOGLYCEMIA_RISK_GLUCOSE_MGDL: Final[float] = 80
CAUTION_GLUCOSE_MGDL: Final[float] = 100
CAUTION_DOSE_UNITS: Final[float] = 2
IOB_CAUTION_UNITS: Final[float] = 3

RISK_MESSAGES: Final[dict[str, str]] = {
    "high": (
        "High risk of hypoglycemia. Consider reducing dose or having "
        "carbs first."
    ),
    "medium": "Moderate risk. Monitor glucose closely after dosing.",
    "low": "Low risk. Dose appears safe based on current parameters.",
}
