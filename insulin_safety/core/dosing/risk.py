"""Advisory risk classification for a proposed dose.

Combines effective glucose, insulin on board, and the IOB-adjusted dose
into a low/medium/high level with guidance text. The result is a
warning only: the user may always proceed.
"""

from insulin_safety.core.dosing.constants import RISK_MESSAGES
from insulin_safety.core.dosing.enums import RiskLevel
from insulin_safety.core.dosing.models import RiskAssessment, RiskThresholds


def classify_risk(
    effective_glucose: float | None,
    insulin_on_board: float,
    adjusted_dose: float,
    thresholds: RiskThresholds | None = None,
) -> RiskLevel:
    """Classify risk; rules are evaluated in order and the first match wins.

    1. No glucose value: low (nothing to assess, so not alarming).
    2. Glucose below the hypoglycemia threshold: high.
    3. Glucose below the caution threshold with a dose above the caution
       dose: medium.
    4. IOB above the IOB caution threshold: medium.
    5. Otherwise: low.
    """
    if thresholds is None:
        thresholds = RiskThresholds()

    if effective_glucose is None:
        return RiskLevel.low
    if effective_glucose < thresholds.hypoglycemia_glucose:
        return RiskLevel.high
    if (
        effective_glucose < thresholds.caution_glucose
        and adjusted_dose > thresholds.caution_dose_units
    ):
        return RiskLevel.medium
    if insulin_on_board > thresholds.iob_caution_units:
        return RiskLevel.medium
    return RiskLevel.low


def assess_risk(
    effective_glucose: float | None,
    insulin_on_board: float,
    adjusted_dose: float,
    thresholds: RiskThresholds | None = None,
) -> RiskAssessment:
    """Classify risk and attach the user-facing guidance message.

    Args:
        effective_glucose: Manual override or live reading (None if neither).
        insulin_on_board: Current IOB in units.
        adjusted_dose: Proposed dose after IOB adjustment, in units.
        thresholds: Risk thresholds (defaults to the clinical baseline).

    Returns:
        RiskAssessment with level, message, and the inputs that drove it.
    """
    if thresholds is None:
        thresholds = RiskThresholds()

    level = classify_risk(
        effective_glucose, insulin_on_board, adjusted_dose, thresholds
    )

    return RiskAssessment(
        level=level,
        message=RISK_MESSAGES[level.value],
        details={
            "effective_glucose_mgdl": effective_glucose,
            "insulin_on_board_units": insulin_on_board,
            "adjusted_dose_units": adjusted_dose,
            "hypoglycemia_glucose_mgdl": thresholds.hypoglycemia_glucose,
            "caution_glucose_mgdl": thresholds.caution_glucose,
            "caution_dose_units": thresholds.caution_dose_units,
            "iob_caution_units": thresholds.iob_caution_units,
        },
    )
