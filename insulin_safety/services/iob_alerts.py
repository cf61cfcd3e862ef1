"""IoB safety alerts.

Checks the user's bolus insulin on board against warning thresholds
and detects insulin stacking (several doses close together). Alerts
are advisory; delivery to the user is handled by the notification
subsystem.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum, auto

from insulin_safety.config import settings
from insulin_safety.core.dosing.enums import InsulinType
from insulin_safety.core.dosing.iob import calculate_iob, hours_between
from insulin_safety.core.dosing.models import InsulinDose
from insulin_safety.logging_config import get_logger

logger = get_logger(__name__)

# Basal-style insulins are excluded: their IoB is background, not stacking risk
BOLUS_INSULIN_TYPES = frozenset({InsulinType.rapid, InsulinType.short})


class IOBAlertType(StrEnum):
    """Kinds of IoB alert."""

    high_iob = auto()
    moderate_iob = auto()
    stacking = auto()


class AlertSeverity(StrEnum):
    """Severity shown on the alert banner."""

    info = auto()
    warning = auto()
    high = auto()


@dataclass
class IOBAlert:
    """An IoB alert ready for display or notification."""

    alert_type: IOBAlertType
    severity: AlertSeverity
    message: str
    iob: float
    created_at: datetime


def check_iob_level(
    current_iob: float,
    now: datetime,
    high_iob_units: float,
    moderate_iob_units: float,
) -> IOBAlert | None:
    """Alert when IoB reaches the high or moderate threshold.

    Only the more severe alert is returned.
    """
    if current_iob >= high_iob_units:
        return IOBAlert(
            alert_type=IOBAlertType.high_iob,
            severity=AlertSeverity.high,
            message=(
                f"High IOB detected: {current_iob:g}u. "
                "Consider delaying correction doses."
            ),
            iob=current_iob,
            created_at=now,
        )
    if current_iob >= moderate_iob_units:
        return IOBAlert(
            alert_type=IOBAlertType.moderate_iob,
            severity=AlertSeverity.warning,
            message=(
                f"Moderate IOB: {current_iob:g}u. "
                "Be cautious with additional insulin."
            ),
            iob=current_iob,
            created_at=now,
        )
    return None


def check_stacking(
    doses: Sequence[InsulinDose],
    current_iob: float,
    now: datetime,
    window_hours: float,
    dose_count: int,
) -> IOBAlert | None:
    """Alert when too many doses were taken within the stacking window."""
    recent = [d for d in doses if hours_between(d.timestamp, now) < window_hours]
    if len(recent) < dose_count:
        return None

    return IOBAlert(
        alert_type=IOBAlertType.stacking,
        severity=AlertSeverity.warning,
        message=(
            f"{len(recent)} doses in the last {window_hours:g} hours. "
            "Watch for insulin stacking."
        ),
        iob=current_iob,
        created_at=now,
    )


def evaluate_iob_alerts(
    doses: Sequence[InsulinDose],
    *,
    now: datetime | None = None,
    high_iob_units: float | None = None,
    moderate_iob_units: float | None = None,
    stacking_window_hours: float | None = None,
    stacking_dose_count: int | None = None,
) -> list[IOBAlert]:
    """Evaluate IoB alerts for a user's recent doses.

    Only rapid and short acting doses are considered. Thresholds default
    to the configured settings.

    Args:
        doses: Recent doses (any insulin type).
        now: Evaluation time (defaults to now, UTC).
        high_iob_units: IoB at or above which a high alert is raised.
        moderate_iob_units: IoB at or above which a moderate alert is raised.
        stacking_window_hours: Window for counting recent doses.
        stacking_dose_count: Dose count within the window that triggers
            a stacking alert.

    Returns:
        Alerts in order: IoB level alert (if any), then stacking.
    """
    if now is None:
        now = datetime.now(UTC)
    if high_iob_units is None:
        high_iob_units = settings.iob_alert_high_units
    if moderate_iob_units is None:
        moderate_iob_units = settings.iob_alert_moderate_units
    if stacking_window_hours is None:
        stacking_window_hours = settings.stacking_window_hours
    if stacking_dose_count is None:
        stacking_dose_count = settings.stacking_dose_count

    bolus_doses = [d for d in doses if d.insulin_type in BOLUS_INSULIN_TYPES]
    current_iob = calculate_iob(bolus_doses, now).total_iob

    alerts: list[IOBAlert] = []

    level_alert = check_iob_level(
        current_iob, now, high_iob_units, moderate_iob_units
    )
    if level_alert is not None:
        alerts.append(level_alert)

    stacking_alert = check_stacking(
        bolus_doses, current_iob, now, stacking_window_hours, stacking_dose_count
    )
    if stacking_alert is not None:
        alerts.append(stacking_alert)

    if alerts:
        logger.warning(
            "IoB alerts raised",
            current_iob=current_iob,
            alert_types=[a.alert_type.value for a in alerts],
        )

    return alerts
