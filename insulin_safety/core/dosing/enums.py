"""Dosing enums.

Insulin and risk classifications for the dosing subsystem.
See __init__.py for important clinical context.
"""

from enum import StrEnum, auto


class InsulinType(StrEnum):
    """Insulin action class.

    The class determines the default duration of insulin action
    (see ``constants.INSULIN_DURATIONS``). A dose stores its own
    duration so per-user or clinical overrides survive.
    """

    rapid = auto()
    short = auto()
    intermediate = auto()
    long = auto()


class RiskLevel(StrEnum):
    """Advisory risk level for a proposed dose.

    Risk is never blocking: every level allows the user to proceed.
    """

    low = auto()
    medium = auto()
    high = auto()
