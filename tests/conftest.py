"""Pytest configuration and shared fixtures.

Every test evaluates at a fixed, timezone-aware instant so IoB values
are reproducible.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from insulin_safety.core.dosing import InsulinDose, InsulinType, get_insulin_duration

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time."""
    return FIXED_NOW


@pytest.fixture
def make_dose(now: datetime) -> Callable[..., InsulinDose]:
    """Factory for doses taken a given number of hours before ``now``."""
    counter = 0

    def _make(
        amount: float = 10.0,
        hours_ago: float = 0.0,
        insulin_type: InsulinType = InsulinType.rapid,
        duration: float | None = None,
        dose_id: str | None = None,
    ) -> InsulinDose:
        nonlocal counter
        counter += 1
        return InsulinDose(
            id=dose_id or str(counter),
            amount=amount,
            timestamp=now - timedelta(hours=hours_ago),
            insulin_type=insulin_type,
            duration=(
                duration if duration is not None else get_insulin_duration(insulin_type)
            ),
        )

    return _make
