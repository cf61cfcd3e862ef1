"""Insulin on Board (IOB) aggregation.

Applies the decay model to a collection of dose records. Pure
computation, no I/O: the caller supplies both the doses and the
evaluation time.
"""

from collections.abc import Iterable
from datetime import UTC, datetime

from insulin_safety.core.dosing.decay import calculate_decay_factor
from insulin_safety.core.dosing.models import DoseDetail, InsulinDose, IOBResult
from insulin_safety.core.dosing.rounding import round_to_2


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours from start to end, clamped at zero."""
    return max(0.0, (end - start).total_seconds() / 3600)


def calculate_iob(
    doses: Iterable[InsulinDose],
    current_time: datetime | None = None,
) -> IOBResult:
    """Calculate insulin on board from a set of doses.

    Doses whose timestamp lies after current_time are treated as just
    taken (zero elapsed hours). A dose whose remaining amount has reached
    zero counts as expired: its full original amount goes to expired_iob
    and nothing to total_iob.

    Args:
        doses: Insulin doses to evaluate, in any order.
        current_time: Evaluation time (defaults to now, UTC).

    Returns:
        IOBResult with per-dose detail in input order. All values are
        rounded to 2 decimal places.
    """
    if current_time is None:
        current_time = datetime.now(UTC)

    total_iob = 0.0
    active_iob = 0.0
    expired_iob = 0.0
    details: list[DoseDetail] = []

    for dose in doses:
        hours_elapsed = hours_between(dose.timestamp, current_time)
        decay_factor = calculate_decay_factor(hours_elapsed, dose.duration)
        remaining_amount = dose.amount * decay_factor
        hours_remaining = max(0.0, dose.duration - hours_elapsed)

        if remaining_amount > 0:
            active_iob += remaining_amount
        else:
            expired_iob += dose.amount

        total_iob += remaining_amount

        details.append(
            DoseDetail(
                id=dose.id,
                amount=dose.amount,
                remaining_amount=round_to_2(remaining_amount),
                percentage_remaining=round_to_2(decay_factor * 100),
                hours_elapsed=round_to_2(hours_elapsed),
                hours_remaining=round_to_2(hours_remaining),
            )
        )

    return IOBResult(
        total_iob=round_to_2(total_iob),
        active_iob=round_to_2(active_iob),
        expired_iob=round_to_2(expired_iob),
        doses=details,
    )
