"""Tests for IoB aggregation."""

from datetime import timedelta

import pytest

from insulin_safety.core.dosing import (
    InsulinDose,
    InsulinType,
    InvalidArgumentError,
    calculate_iob,
)
from insulin_safety.core.dosing.iob import hours_between


class TestCalculateIOB:
    """Tests for calculate_iob."""

    def test_single_active_dose(self, make_dose, now):
        """10u taken 2 hours ago with a 4 hour duration is partly active."""
        result = calculate_iob([make_dose(10, hours_ago=2)], now)

        assert 0 < result.total_iob < 10
        assert result.total_iob == 1.35  # 10 * exp(-2)
        assert result.active_iob == result.total_iob
        assert result.expired_iob == 0

    def test_single_expired_dose(self, make_dose, now):
        """10u taken 5 hours ago with a 4 hour duration has fully expired."""
        result = calculate_iob([make_dose(10, hours_ago=5)], now)

        assert result.total_iob == 0
        assert result.active_iob == 0
        assert result.expired_iob == 10

    def test_dose_at_exact_duration_is_expired(self, make_dose, now):
        result = calculate_iob([make_dose(10, hours_ago=4)], now)

        assert result.total_iob == 0
        assert result.expired_iob == 10
        assert result.doses[0].remaining_amount == 0
        assert result.doses[0].hours_remaining == 0

    def test_sums_multiple_doses(self, make_dose, now):
        doses = [make_dose(5, hours_ago=1), make_dose(5, hours_ago=2)]
        result = calculate_iob(doses, now)

        # 5 * exp(-1) + 5 * exp(-2)
        assert result.total_iob == 2.52
        assert len(result.doses) == 2

    def test_mixed_active_and_expired(self, make_dose, now):
        doses = [make_dose(4, hours_ago=1), make_dose(6, hours_ago=4.5)]
        result = calculate_iob(doses, now)

        assert result.total_iob == 1.47
        assert result.active_iob == 1.47
        assert result.expired_iob == 6

    def test_different_insulin_types(self, make_dose, now):
        doses = [
            make_dose(5, hours_ago=1, insulin_type=InsulinType.rapid),
            make_dose(10, hours_ago=1, insulin_type=InsulinType.long),
        ]
        result = calculate_iob(doses, now)

        assert result.doses[0].remaining_amount == 1.84
        assert result.doses[1].remaining_amount == 8.46
        assert result.total_iob == 10.3

    def test_empty_doses(self, now):
        result = calculate_iob([], now)

        assert result.total_iob == 0
        assert result.active_iob == 0
        assert result.expired_iob == 0
        assert result.doses == []

    def test_dose_detail_fields(self, make_dose, now):
        result = calculate_iob([make_dose(10, hours_ago=2, dose_id="abc")], now)
        detail = result.doses[0]

        assert detail.id == "abc"
        assert detail.amount == 10
        assert detail.remaining_amount == 1.35
        assert detail.percentage_remaining == 13.53
        assert detail.hours_elapsed == 2
        assert detail.hours_remaining == 2

    def test_preserves_input_order(self, make_dose, now):
        doses = [
            make_dose(1, hours_ago=3, dose_id="c"),
            make_dose(1, hours_ago=0.5, dose_id="a"),
            make_dose(1, hours_ago=6, dose_id="b"),
        ]
        result = calculate_iob(doses, now)

        assert [d.id for d in result.doses] == ["c", "a", "b"]

    def test_future_dose_clamped_to_now(self, make_dose, now):
        """A dose timestamped in the future counts as just taken."""
        result = calculate_iob([make_dose(10, hours_ago=-1)], now)

        assert result.total_iob == 10
        assert result.doses[0].hours_elapsed == 0
        assert result.doses[0].percentage_remaining == 100

    def test_fresh_dose_fully_active(self, make_dose, now):
        result = calculate_iob([make_dose(10, hours_ago=0)], now)

        assert result.total_iob == 10
        assert result.doses[0].hours_remaining == 4

    def test_values_rounded_to_two_places(self, make_dose, now):
        result = calculate_iob([make_dose(3.333, hours_ago=1 / 3)], now)
        detail = result.doses[0]

        for value in (
            result.total_iob,
            detail.remaining_amount,
            detail.percentage_remaining,
            detail.hours_elapsed,
            detail.hours_remaining,
        ):
            assert value == round(value, 2)

    def test_idempotent_for_fixed_time(self, make_dose, now):
        doses = [make_dose(3, hours_ago=0.5), make_dose(7, hours_ago=3.5)]

        assert calculate_iob(doses, now) == calculate_iob(doses, now)

    def test_defaults_to_current_time(self, make_dose):
        """Without an explicit time, a dose taken long ago has expired."""
        result = calculate_iob([make_dose(10, hours_ago=0)])

        assert result.total_iob == 0
        assert result.expired_iob == 10

    def test_accepts_generator(self, make_dose, now):
        result = calculate_iob((make_dose(2, hours_ago=h) for h in (1, 2)), now)
        assert len(result.doses) == 2


class TestIOBInvariants:
    """Invariants that hold for any dose list."""

    @pytest.fixture
    def varied_doses(self, make_dose):
        return [
            make_dose(0, hours_ago=1),
            make_dose(2.5, hours_ago=0.1),
            make_dose(10, hours_ago=3.99),
            make_dose(8, hours_ago=4),
            make_dose(12, hours_ago=5, insulin_type=InsulinType.short),
            make_dose(20, hours_ago=10, insulin_type=InsulinType.intermediate),
            make_dose(25, hours_ago=23.5, insulin_type=InsulinType.long),
        ]

    def test_total_equals_active(self, varied_doses, now):
        result = calculate_iob(varied_doses, now)
        assert result.total_iob == result.active_iob

    def test_remaining_within_amount(self, varied_doses, now):
        result = calculate_iob(varied_doses, now)
        for detail in result.doses:
            assert 0 <= detail.remaining_amount <= detail.amount
            assert 0 <= detail.percentage_remaining <= 100
            assert detail.hours_remaining >= 0

    def test_remaining_and_expired_reconcile(self, varied_doses, now):
        """Active remaining amounts sum to active IoB; expired amounts to expired IoB."""
        result = calculate_iob(varied_doses, now)

        active_sum = sum(d.remaining_amount for d in result.doses)
        expired_sum = sum(d.amount for d in result.doses if d.remaining_amount == 0)

        assert active_sum == pytest.approx(result.active_iob, abs=0.01 * len(varied_doses))
        assert expired_sum == pytest.approx(result.expired_iob)

    def test_iob_never_exceeds_total_given(self, varied_doses, now):
        result = calculate_iob(varied_doses, now)
        assert result.total_iob <= sum(d.amount for d in varied_doses)


class TestInsulinDoseModel:
    """Construction guards on InsulinDose."""

    def test_negative_amount_rejected(self, now):
        with pytest.raises(ValueError):
            InsulinDose(
                id="1",
                amount=-1,
                timestamp=now,
                insulin_type=InsulinType.rapid,
                duration=4,
            )

    def test_non_positive_duration_rejected(self, now):
        with pytest.raises(ValueError):
            InsulinDose(
                id="1",
                amount=1,
                timestamp=now,
                insulin_type=InsulinType.rapid,
                duration=0,
            )

    def test_naive_timestamp_rejected(self, now):
        with pytest.raises(ValueError):
            InsulinDose(
                id="1",
                amount=1,
                timestamp=now.replace(tzinfo=None),
                insulin_type=InsulinType.rapid,
                duration=4,
            )

    def test_dose_is_immutable(self, make_dose):
        dose = make_dose(5)
        with pytest.raises(ValueError):
            dose.amount = 6

    def test_timestamp_supports_elapsed_hours(self, make_dose, now):
        dose = make_dose(1, hours_ago=1.5)
        assert (now - dose.timestamp) == timedelta(hours=1.5)


def test_zero_duration_reaches_decay_guard(now):
    """A duration bypassing model validation still fails in the decay model."""
    dose = InsulinDose.model_construct(
        id="x",
        amount=1,
        timestamp=now,
        insulin_type=InsulinType.rapid,
        duration=0,
    )
    with pytest.raises(InvalidArgumentError, match="Duration must be positive"):
        calculate_iob([dose], now)


class TestHoursBetween:
    def test_elapsed_hours(self, now):
        assert hours_between(now - timedelta(minutes=90), now) == 1.5

    def test_future_start_clamped(self, now):
        assert hours_between(now + timedelta(hours=1), now) == 0
