"""Dosing Pydantic models.

Pure data models for IOB and dose calculation. No persistence
dependencies. Field bounds on CalculatorSettings match the clinical
bounds enforced by the input validator.

See __init__.py for important clinical context.
"""

from typing import Any

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from insulin_safety.core.dosing.constants import (
    CAUTION_DOSE_UNITS,
    CAUTION_GLUCOSE_MGDL,
    DEFAULT_CORRECTION_FACTOR,
    DEFAULT_INSULIN_TO_CARB,
    DEFAULT_TARGET_GLUCOSE_MGDL,
    HYPOGLYCEMIA_RISK_GLUCOSE_MGDL,
    INSULIN_DURATIONS,
    IOB_CAUTION_UNITS,
    MAX_CORRECTION_FACTOR,
    MAX_INSULIN_TO_CARB,
    MAX_TARGET_GLUCOSE_MGDL,
    MIN_CORRECTION_FACTOR,
    MIN_INSULIN_TO_CARB,
    MIN_TARGET_GLUCOSE_MGDL,
)
from insulin_safety.core.dosing.enums import InsulinType, RiskLevel


class InsulinDose(BaseModel):
    """A record of one administered insulin dose.

    Doses are immutable inputs to the calculation core. ``duration`` is
    stored on the dose rather than derived from ``insulin_type`` so that
    per-user overrides are preserved in history.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    amount: float = Field(ge=0, description="Units of insulin delivered.")
    timestamp: AwareDatetime
    insulin_type: InsulinType
    duration: float = Field(
        gt=0, description="Total duration of insulin action in hours."
    )
    notes: str | None = None


class DoseDetail(BaseModel):
    """Per-dose breakdown inside an IOBResult."""

    model_config = ConfigDict(frozen=True)

    id: str
    amount: float
    remaining_amount: float
    percentage_remaining: float = Field(ge=0, le=100)
    hours_elapsed: float
    hours_remaining: float


class IOBResult(BaseModel):
    """Insulin on board evaluated for a set of doses at one point in time.

    Computed fresh on every evaluation and never persisted. Expired doses
    contribute nothing to ``total_iob`` and their full original amount to
    ``expired_iob``, so ``total_iob == active_iob`` always holds.
    """

    model_config = ConfigDict(frozen=True)

    total_iob: float = Field(ge=0)
    active_iob: float = Field(ge=0)
    expired_iob: float = Field(ge=0)
    doses: list[DoseDetail] = Field(default_factory=list)


class CalculatorSettings(BaseModel):
    """User calculator settings, supplied by the settings source."""

    model_config = ConfigDict(frozen=True)

    insulin_to_carb: float = Field(
        default=DEFAULT_INSULIN_TO_CARB,
        ge=MIN_INSULIN_TO_CARB,
        le=MAX_INSULIN_TO_CARB,
        description="Grams of carbohydrate covered by 1 unit.",
    )
    correction_factor: float = Field(
        default=DEFAULT_CORRECTION_FACTOR,
        ge=MIN_CORRECTION_FACTOR,
        le=MAX_CORRECTION_FACTOR,
        description="mg/dL drop per unit.",
    )
    target_glucose: float = Field(
        default=DEFAULT_TARGET_GLUCOSE_MGDL,
        ge=MIN_TARGET_GLUCOSE_MGDL,
        le=MAX_TARGET_GLUCOSE_MGDL,
    )
    rapid_acting_duration: float = Field(
        default=INSULIN_DURATIONS[InsulinType.rapid], gt=0
    )
    short_acting_duration: float = Field(
        default=INSULIN_DURATIONS[InsulinType.short], gt=0
    )

    def duration_for(self, insulin_type: InsulinType) -> float:
        """Action duration for an insulin type, honouring user overrides."""
        if insulin_type == InsulinType.rapid:
            return self.rapid_acting_duration
        if insulin_type == InsulinType.short:
            return self.short_acting_duration
        return INSULIN_DURATIONS[InsulinType(insulin_type)]


class RiskThresholds(BaseModel):
    """Thresholds driving the advisory risk classification."""

    model_config = ConfigDict(frozen=True)

    hypoglycemia_glucose: float = Field(
        default=HYPOGLYCEMIA_RISK_GLUCOSE_MGDL, gt=0
    )
    caution_glucose: float = Field(default=CAUTION_GLUCOSE_MGDL, gt=0)
    caution_dose_units: float = Field(default=CAUTION_DOSE_UNITS, ge=0)
    iob_caution_units: float = Field(default=IOB_CAUTION_UNITS, ge=0)


class RiskAssessment(BaseModel):
    """Advisory risk for a proposed dose.

    ``allow_proceed`` is always True: risk is surfaced as a warning and
    never refuses the action.
    """

    model_config = ConfigDict(frozen=True)

    level: RiskLevel
    message: str = Field(min_length=1)
    details: dict[str, Any] = Field(default_factory=dict)
    allow_proceed: bool = True


class DoseRecommendation(BaseModel):
    """Result of a full smart-calculator evaluation."""

    model_config = ConfigDict(frozen=True)

    effective_glucose: float | None
    used_manual_glucose: bool = False
    carb_coverage: float = Field(ge=0)
    correction_dose: float = Field(ge=0)
    total_dose: float = Field(ge=0, description="Units before IOB adjustment.")
    adjusted_dose: float = Field(ge=0, description="Units after IOB adjustment.")
    iob_adjustment: float = Field(ge=0)
    iob: IOBResult
    risk: RiskAssessment

    def summary_note(self) -> str:
        """Note stored alongside a dose logged from this recommendation."""
        note = (
            f"Smart calculator: {self.carb_coverage:g}u carbs + "
            f"{self.correction_dose:g}u correction - "
            f"{self.iob_adjustment:g}u IOB"
        )
        if self.used_manual_glucose:
            note += " (manual glucose)"
        return note
