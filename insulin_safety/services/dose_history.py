"""Dose history access.

The dosing services never reach for a global storage client. Callers
pass in a DoseHistorySource; the application wires its persistence
layer behind this protocol, tests and embedded callers use the
in-memory implementation.
"""

from collections import defaultdict
from datetime import datetime
from typing import Protocol

from insulin_safety.core.dosing.models import InsulinDose
from insulin_safety.logging_config import get_logger

logger = get_logger(__name__)


class DoseHistorySource(Protocol):
    """Reads and records insulin doses for a user."""

    def get_doses(self, user_id: str, since: datetime) -> list[InsulinDose]:
        """Doses taken at or after ``since``, oldest first."""
        ...

    def add_dose(self, user_id: str, dose: InsulinDose) -> None:
        """Record a newly administered dose."""
        ...


class InMemoryDoseHistory:
    """DoseHistorySource backed by per-user lists.

    Not thread-safe; each instance is owned by a single caller.
    """

    def __init__(self) -> None:
        self._doses: dict[str, list[InsulinDose]] = defaultdict(list)

    def get_doses(self, user_id: str, since: datetime) -> list[InsulinDose]:
        doses = [d for d in self._doses.get(user_id, []) if d.timestamp >= since]
        return sorted(doses, key=lambda d: d.timestamp)

    def add_dose(self, user_id: str, dose: InsulinDose) -> None:
        """Store a dose.

        Raises:
            ValueError: If the user already has a dose with the same id.
        """
        existing = self._doses[user_id]
        if any(d.id == dose.id for d in existing):
            msg = f"Dose {dose.id} already recorded for user {user_id}"
            raise ValueError(msg)
        existing.append(dose)

        logger.debug(
            "Recorded insulin dose",
            user_id=user_id,
            dose_id=dose.id,
            amount=dose.amount,
            insulin_type=dose.insulin_type.value,
        )
