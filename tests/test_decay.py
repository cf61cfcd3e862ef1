"""Tests for the insulin decay model and duration table."""

import math

import pytest

from insulin_safety.core.dosing import (
    INSULIN_DURATIONS,
    InsulinType,
    InvalidArgumentError,
    calculate_decay_factor,
    get_insulin_duration,
)


class TestCalculateDecayFactor:
    """Tests for calculate_decay_factor."""

    def test_no_decay_at_zero_hours(self):
        """At time 0 the full dose is active."""
        assert calculate_decay_factor(0, 4) == 1.0

    def test_complete_decay_at_duration(self):
        """At exactly the action duration the dose is fully absorbed."""
        assert calculate_decay_factor(4, 4) == 0.0

    def test_complete_decay_after_duration(self):
        assert calculate_decay_factor(5, 4) == 0.0

    def test_partial_decay(self):
        """Midway through, the factor is strictly between 0 and 1."""
        factor = calculate_decay_factor(2, 4)
        assert 0 < factor < 1

    def test_exponential_curve(self):
        """The curve is exp(-(4 / duration) * t)."""
        assert calculate_decay_factor(2, 4) == pytest.approx(math.exp(-2))
        assert calculate_decay_factor(1, 4) == pytest.approx(math.exp(-1))
        assert calculate_decay_factor(3, 6) == pytest.approx(math.exp(-2))

    def test_decays_faster_than_linear_early_on(self):
        """At 1 hour of 4, less than the linear 75% remains."""
        assert calculate_decay_factor(1, 4) < 0.75

    def test_monotonically_non_increasing(self):
        times = [i * 0.25 for i in range(0, 21)]
        factors = [calculate_decay_factor(t, 4) for t in times]
        assert factors == sorted(factors, reverse=True)

    @pytest.mark.parametrize("duration", [0.5, 3.5, 4, 6, 16, 24])
    def test_boundaries_hold_for_any_duration(self, duration):
        assert calculate_decay_factor(0, duration) == 1.0
        assert calculate_decay_factor(duration, duration) == 0.0
        assert calculate_decay_factor(duration * 2, duration) == 0.0

    @pytest.mark.parametrize("hours", [0.001, 0.5, 1.999, 3.9999, 10])
    def test_output_in_unit_interval(self, hours):
        assert 0.0 <= calculate_decay_factor(hours, 4) <= 1.0

    def test_negative_hours_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Hours elapsed cannot be negative"):
            calculate_decay_factor(-1, 4)

    def test_non_positive_duration_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Duration must be positive"):
            calculate_decay_factor(1, 0)
        with pytest.raises(InvalidArgumentError, match="Duration must be positive"):
            calculate_decay_factor(1, -1)

    @pytest.mark.parametrize("hours", [math.nan, math.inf])
    def test_non_finite_hours_rejected(self, hours):
        """NaN would otherwise be clamped to a full dose still active."""
        with pytest.raises(
            InvalidArgumentError, match="Hours elapsed must be a finite number"
        ):
            calculate_decay_factor(hours, 4)

    @pytest.mark.parametrize("duration", [math.nan, math.inf])
    def test_non_finite_duration_rejected(self, duration):
        with pytest.raises(InvalidArgumentError, match="Duration must be a finite number"):
            calculate_decay_factor(1, duration)

    def test_invalid_argument_is_value_error(self):
        """Callers catching ValueError also catch dosing input errors."""
        with pytest.raises(ValueError):
            calculate_decay_factor(-1, 4)


class TestInsulinDurations:
    """Tests for the standard duration table."""

    def test_table_values(self):
        assert INSULIN_DURATIONS == {
            InsulinType.rapid: 4,
            InsulinType.short: 6,
            InsulinType.intermediate: 16,
            InsulinType.long: 24,
        }

    @pytest.mark.parametrize(
        ("insulin_type", "hours"),
        [("rapid", 4), ("short", 6), ("intermediate", 16), ("long", 24)],
    )
    def test_lookup_by_string(self, insulin_type, hours):
        assert get_insulin_duration(insulin_type) == hours

    def test_lookup_by_enum(self):
        assert get_insulin_duration(InsulinType.long) == 24

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Unknown insulin type: basal"):
            get_insulin_duration("basal")
