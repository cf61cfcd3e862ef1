"""Insulin on Board and dosing safety.

This package models how injected insulin decays over time, combines
that with carbohydrate and correction-dose arithmetic, and classifies
the risk of a proposed dose so the user can be warned before stacking
an unsafe one. Components, leaf first:

1. Decay model (calculate_decay_factor, get_insulin_duration)
2. IOB aggregation (calculate_iob)
3. Dose arithmetic (carb coverage, correction dose, total dose)
4. Input validation (clinical ranges)
5. Risk classification (advisory low/medium/high)

Everything here is pure and synchronous. Callers supply dose history,
glucose values, settings and the evaluation time. Nothing here touches
storage or logs, and the only clock read is calculate_iob's default
evaluation time, which every caller can pass explicitly.

IMPORTANT: These calculations back real dosing decisions -- they do
NOT replace clinical judgment. Invalid input is always refused with a
specific reason rather than clamped to a best guess.
"""

from insulin_safety.core.dosing.arithmetic import (
    calculate_carb_coverage,
    calculate_correction_dose,
    calculate_total_dose,
)
from insulin_safety.core.dosing.constants import INSULIN_DURATIONS
from insulin_safety.core.dosing.decay import (
    calculate_decay_factor,
    get_insulin_duration,
)
from insulin_safety.core.dosing.enums import InsulinType, RiskLevel
from insulin_safety.core.dosing.exceptions import InvalidArgumentError
from insulin_safety.core.dosing.iob import calculate_iob
from insulin_safety.core.dosing.models import (
    CalculatorSettings,
    DoseDetail,
    DoseRecommendation,
    InsulinDose,
    IOBResult,
    RiskAssessment,
    RiskThresholds,
)
from insulin_safety.core.dosing.risk import assess_risk, classify_risk
from insulin_safety.core.dosing.rounding import round_to_2
from insulin_safety.core.dosing.validator import validate_calculation_inputs

__all__ = [
    "INSULIN_DURATIONS",
    "CalculatorSettings",
    "DoseDetail",
    "DoseRecommendation",
    "IOBResult",
    "InsulinDose",
    "InsulinType",
    "InvalidArgumentError",
    "RiskAssessment",
    "RiskLevel",
    "RiskThresholds",
    "assess_risk",
    "calculate_carb_coverage",
    "calculate_correction_dose",
    "calculate_decay_factor",
    "calculate_iob",
    "calculate_total_dose",
    "classify_risk",
    "get_insulin_duration",
    "round_to_2",
    "validate_calculation_inputs",
]
