"""Insulin on Board (IoB) projection.

Computes the user's current IoB from dose history and projects how it
decays over the coming hours, broken down by insulin type. Every point
on the curve is a fresh evaluation of the dosing core, so the curve and
the current value always agree.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from insulin_safety.config import settings
from insulin_safety.core.dosing.enums import InsulinType
from insulin_safety.core.dosing.exceptions import InvalidArgumentError
from insulin_safety.core.dosing.iob import calculate_iob
from insulin_safety.core.dosing.models import InsulinDose, IOBResult
from insulin_safety.core.dosing.rounding import round_to_2
from insulin_safety.logging_config import get_logger
from insulin_safety.services.dose_history import DoseHistorySource

logger = get_logger(__name__)


@dataclass
class IOBDecayPoint:
    """Projected IoB at one point on the decay curve."""

    time: datetime
    minutes_from_now: int
    total_iob: float
    iob_by_type: dict[InsulinType, float]
    label: str


@dataclass
class DecaySummary:
    """Headline values read off a decay curve."""

    current_iob: float
    peak_iob: float
    projected_30min: float
    projected_60min: float
    # None when IoB does not reach zero within the curve's horizon
    hours_to_zero: float | None
    has_active_insulin: bool


def format_offset_label(minutes: int) -> str:
    """Chart label for a curve offset: 'Now', '+1h 15m', ..."""
    if minutes == 0:
        return "Now"
    return f"+{minutes // 60}h {minutes % 60}m"


def get_current_iob(
    source: DoseHistorySource,
    user_id: str,
    *,
    now: datetime | None = None,
    lookback_hours: float | None = None,
) -> IOBResult:
    """Get the user's current IoB from their recent dose history.

    Args:
        source: Dose history to read from.
        user_id: User to evaluate.
        now: Evaluation time (defaults to now, UTC).
        lookback_hours: History window (defaults to settings.dose_lookback_hours).

    Returns:
        IOBResult for the doses inside the lookback window.
    """
    if now is None:
        now = datetime.now(UTC)
    if lookback_hours is None:
        lookback_hours = settings.dose_lookback_hours

    doses = source.get_doses(user_id, now - timedelta(hours=lookback_hours))
    result = calculate_iob(doses, now)

    logger.debug(
        "Calculated current IoB",
        user_id=user_id,
        dose_count=len(doses),
        total_iob=result.total_iob,
        expired_iob=result.expired_iob,
    )

    return result


def project_iob_decay(
    doses: Sequence[InsulinDose],
    *,
    now: datetime | None = None,
    horizon_minutes: int | None = None,
    step_minutes: int | None = None,
) -> list[IOBDecayPoint]:
    """Project IoB at fixed steps from now to the horizon (inclusive).

    Args:
        doses: Doses contributing to IoB.
        now: Start of the curve (defaults to now, UTC).
        horizon_minutes: How far ahead to project (defaults to settings).
        step_minutes: Spacing between points (defaults to settings).

    Returns:
        One IOBDecayPoint per step, starting at offset 0.

    Raises:
        InvalidArgumentError: If the step is not positive or the horizon
            is negative.
    """
    if now is None:
        now = datetime.now(UTC)
    if horizon_minutes is None:
        horizon_minutes = settings.decay_horizon_minutes
    if step_minutes is None:
        step_minutes = settings.decay_step_minutes

    if step_minutes <= 0:
        raise InvalidArgumentError("Step minutes must be positive")
    if horizon_minutes < 0:
        raise InvalidArgumentError("Horizon minutes cannot be negative")

    points: list[IOBDecayPoint] = []
    for minutes in range(0, horizon_minutes + 1, step_minutes):
        at_time = now + timedelta(minutes=minutes)
        result = calculate_iob(doses, at_time)

        by_type: dict[InsulinType, float] = {}
        for dose, detail in zip(doses, result.doses, strict=True):
            if detail.remaining_amount > 0:
                by_type[dose.insulin_type] = (
                    by_type.get(dose.insulin_type, 0.0) + detail.remaining_amount
                )

        points.append(
            IOBDecayPoint(
                time=at_time,
                minutes_from_now=minutes,
                total_iob=result.total_iob,
                iob_by_type={k: round_to_2(v) for k, v in by_type.items()},
                label=format_offset_label(minutes),
            )
        )

    return points


def _iob_at_offset(points: Sequence[IOBDecayPoint], minutes: int) -> float:
    for point in points:
        if point.minutes_from_now == minutes:
            return point.total_iob
    return 0.0


def summarize_decay(points: Sequence[IOBDecayPoint]) -> DecaySummary:
    """Summarise a decay curve produced by project_iob_decay.

    Raises:
        InvalidArgumentError: If the curve has no points.
    """
    if not points:
        raise InvalidArgumentError("Decay curve must contain at least one point")

    hours_to_zero: float | None = None
    for point in points:
        if point.total_iob == 0:
            hours_to_zero = point.minutes_from_now / 60
            break

    return DecaySummary(
        current_iob=points[0].total_iob,
        peak_iob=max(p.total_iob for p in points),
        projected_30min=_iob_at_offset(points, 30),
        projected_60min=_iob_at_offset(points, 60),
        hours_to_zero=hours_to_zero,
        has_active_insulin=any(p.total_iob > 0 for p in points),
    )
