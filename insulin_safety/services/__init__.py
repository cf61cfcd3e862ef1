# Dosing services
from insulin_safety.services.dose_calculator import (
    log_recommended_dose,
    recommend_dose,
)
from insulin_safety.services.dose_history import DoseHistorySource, InMemoryDoseHistory
from insulin_safety.services.iob_alerts import (
    AlertSeverity,
    IOBAlert,
    IOBAlertType,
    evaluate_iob_alerts,
)
from insulin_safety.services.iob_projection import (
    DecaySummary,
    IOBDecayPoint,
    get_current_iob,
    project_iob_decay,
    summarize_decay,
)

__all__ = [
    "AlertSeverity",
    "DecaySummary",
    "DoseHistorySource",
    "IOBAlert",
    "IOBAlertType",
    "IOBDecayPoint",
    "InMemoryDoseHistory",
    "evaluate_iob_alerts",
    "get_current_iob",
    "log_recommended_dose",
    "project_iob_decay",
    "recommend_dose",
    "summarize_decay",
]
