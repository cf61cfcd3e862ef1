"""Smart dose calculator.

Runs the full recommendation pipeline: clinical validation, IoB from
dose history, carb and correction arithmetic, IoB adjustment, and the
advisory risk check. Also records a dose the user chose to take.
"""

import uuid
from collections.abc import Sequence
from datetime import UTC, datetime

from insulin_safety.config import settings as app_settings
from insulin_safety.core.dosing.arithmetic import (
    calculate_carb_coverage,
    calculate_correction_dose,
    calculate_total_dose,
)
from insulin_safety.core.dosing.enums import InsulinType, RiskLevel
from insulin_safety.core.dosing.exceptions import InvalidArgumentError
from insulin_safety.core.dosing.iob import calculate_iob
from insulin_safety.core.dosing.models import (
    CalculatorSettings,
    DoseRecommendation,
    InsulinDose,
    RiskThresholds,
)
from insulin_safety.core.dosing.risk import assess_risk
from insulin_safety.core.dosing.rounding import round_to_2
from insulin_safety.core.dosing.validator import validate_calculation_inputs
from insulin_safety.logging_config import get_logger
from insulin_safety.services.dose_history import DoseHistorySource

logger = get_logger(__name__)


def resolve_effective_glucose(
    current_glucose: float | None,
    manual_glucose: float | None,
) -> tuple[float | None, bool]:
    """Pick the glucose value to dose against.

    A manual override wins over the live reading.

    Returns:
        Tuple of (effective glucose or None, whether the override was used).
    """
    if manual_glucose is not None:
        return manual_glucose, True
    return current_glucose, False


def recommend_dose(
    calculator_settings: CalculatorSettings,
    *,
    carbs: float = 0,
    current_glucose: float | None = None,
    manual_glucose: float | None = None,
    doses: Sequence[InsulinDose] = (),
    now: datetime | None = None,
    thresholds: RiskThresholds | None = None,
) -> DoseRecommendation:
    """Recommend a dose for a meal and/or correction.

    Without any glucose value there is nothing to dose against: every
    dose term is 0 and the risk is low.

    Args:
        calculator_settings: The user's ratio, correction factor and target.
        carbs: Grams of carbohydrate to cover.
        current_glucose: Live glucose reading (mg/dL), if available.
        manual_glucose: User-entered glucose overriding the live reading.
        doses: Recent dose history for IoB.
        now: Evaluation time (defaults to now, UTC).
        thresholds: Risk thresholds (defaults to the configured baseline).

    Returns:
        DoseRecommendation with every term and the risk assessment.

    Raises:
        InvalidArgumentError: If any input is outside its clinical range.
    """
    if now is None:
        now = datetime.now(UTC)
    if thresholds is None:
        thresholds = app_settings.risk_thresholds()

    effective_glucose, used_manual = resolve_effective_glucose(
        current_glucose, manual_glucose
    )

    try:
        validate_calculation_inputs(
            carbs=carbs,
            current_glucose=effective_glucose,
            target_glucose=calculator_settings.target_glucose,
            insulin_to_carb=calculator_settings.insulin_to_carb,
            correction_factor=calculator_settings.correction_factor,
        )
    except InvalidArgumentError as e:
        logger.warning("Dose calculation inputs rejected", reason=str(e))
        raise

    iob = calculate_iob(doses, now)

    if effective_glucose is None:
        carb_coverage = correction_dose = total_dose = adjusted_dose = 0.0
        iob_adjustment = 0.0
    else:
        carb_coverage = calculate_carb_coverage(
            carbs, calculator_settings.insulin_to_carb
        )
        correction_dose = calculate_correction_dose(
            effective_glucose,
            calculator_settings.target_glucose,
            calculator_settings.correction_factor,
        )
        total_dose = round_to_2(carb_coverage + correction_dose)
        adjusted_dose = calculate_total_dose(
            carb_coverage, correction_dose, iob.total_iob
        )
        iob_adjustment = iob.total_iob

    risk = assess_risk(effective_glucose, iob.total_iob, adjusted_dose, thresholds)

    recommendation = DoseRecommendation(
        effective_glucose=effective_glucose,
        used_manual_glucose=used_manual,
        carb_coverage=carb_coverage,
        correction_dose=correction_dose,
        total_dose=total_dose,
        adjusted_dose=adjusted_dose,
        iob_adjustment=iob_adjustment,
        iob=iob,
        risk=risk,
    )

    logger.info(
        "Dose recommendation calculated",
        effective_glucose=effective_glucose,
        manual_glucose=used_manual,
        carb_coverage=carb_coverage,
        correction_dose=correction_dose,
        iob=iob.total_iob,
        adjusted_dose=adjusted_dose,
        risk_level=risk.level.value,
    )
    if risk.level == RiskLevel.high:
        logger.warning(
            "High dosing risk",
            effective_glucose=effective_glucose,
            adjusted_dose=adjusted_dose,
            message=risk.message,
        )

    return recommendation


def log_recommended_dose(
    source: DoseHistorySource,
    user_id: str,
    recommendation: DoseRecommendation,
    calculator_settings: CalculatorSettings,
    *,
    now: datetime | None = None,
    dose_id: str | None = None,
) -> InsulinDose:
    """Record the recommended dose as a rapid-acting dose taken now.

    Args:
        source: Dose history to write to.
        user_id: User taking the dose.
        recommendation: Recommendation the user accepted.
        calculator_settings: Supplies the rapid-acting duration.
        now: Time the dose was taken (defaults to now, UTC).
        dose_id: Identifier for the new dose (generated when omitted).

    Returns:
        The InsulinDose that was recorded.

    Raises:
        InvalidArgumentError: If the recommended dose is zero.
    """
    if recommendation.adjusted_dose <= 0:
        raise InvalidArgumentError("Cannot log a zero insulin dose")
    if now is None:
        now = datetime.now(UTC)

    dose = InsulinDose(
        id=dose_id or uuid.uuid4().hex,
        amount=recommendation.adjusted_dose,
        timestamp=now,
        insulin_type=InsulinType.rapid,
        duration=calculator_settings.duration_for(InsulinType.rapid),
        notes=recommendation.summary_note(),
    )
    source.add_dose(user_id, dose)

    logger.info(
        "Logged recommended dose",
        user_id=user_id,
        dose_id=dose.id,
        amount=dose.amount,
    )

    return dose
