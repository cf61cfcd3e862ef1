"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from insulin_safety.core.dosing.models import RiskThresholds


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Only the services layer reads these. The pure dosing core takes every
    value as an explicit argument.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_format: str = "json"  # 'json' or 'text'
    log_level: str = "INFO"
    service_name: str = "insulin-safety"

    # Dose history window. 8 h covers full decay of rapid and short insulin.
    dose_lookback_hours: float = 8.0

    # IOB alerts
    iob_alert_high_units: float = 5.0
    iob_alert_moderate_units: float = 3.0
    stacking_window_hours: float = 2.0
    stacking_dose_count: int = 3

    # Risk classification baseline
    risk_hypoglycemia_glucose: float = 80.0
    risk_caution_glucose: float = 100.0
    risk_caution_dose_units: float = 2.0
    risk_iob_caution_units: float = 3.0

    # IOB decay curve
    decay_horizon_minutes: int = 360  # 6 hours ahead
    decay_step_minutes: int = 15

    def risk_thresholds(self) -> RiskThresholds:
        """Risk thresholds built from the configured baseline."""
        return RiskThresholds(
            hypoglycemia_glucose=self.risk_hypoglycemia_glucose,
            caution_glucose=self.risk_caution_glucose,
            caution_dose_units=self.risk_caution_dose_units,
            iob_caution_units=self.risk_iob_caution_units,
        )


settings = Settings()
