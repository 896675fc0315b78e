"""
Tests for rider pricing and premium composition.
"""

import pytest

from atlas_quote.pipeline.models import RiderId
from atlas_quote.pipeline.steps.premium_composer import (
    PremiumCompositionStep,
    STATE_POLICY_FEES,
    compute_premium,
    state_policy_fee,
)
from atlas_quote.pipeline.steps.riders import STATE_RIDER_RESTRICTIONS, eligible_riders, rider_cost


class TestRiderCost:
    """Tests for rider_cost."""

    def test_no_riders(self):
        assert rider_cost([], 500_000, 600) == 0.0

    def test_adb(self):
        """Test $0.02 per $1K per month."""
        assert rider_cost([RiderId.ADB], 500_000, 600) == pytest.approx(120.0)

    def test_waiver(self):
        """Test five percent of the annual premium."""
        assert rider_cost([RiderId.WAIVER], 500_000, 600) == pytest.approx(30.0)

    def test_child(self):
        assert rider_cost([RiderId.CHILD], 500_000, 600) == pytest.approx(60.0)

    def test_ltc_minimum(self):
        """Test that LTC never costs less than $10 per month."""
        assert rider_cost([RiderId.LTC], 500_000, 600) == pytest.approx(120.0)

    def test_ltc_percentage(self):
        assert rider_cost([RiderId.LTC], 500_000, 3000) == pytest.approx(240.0)

    def test_all_riders(self):
        riders = [RiderId.ADB, RiderId.WAIVER, RiderId.CHILD, RiderId.LTC]
        assert rider_cost(riders, 500_000, 600) == pytest.approx(330.0)

    def test_plain_strings_and_unknown_ids(self):
        """Test that string ids are accepted and unknown ids cost nothing."""
        assert rider_cost(["Waiver", "XYZ"], 500_000, 600) == pytest.approx(30.0)


class TestEligibleRiders:
    """Tests for state rider restrictions."""

    def test_ny_removes_ltc(self):
        kept, removed = eligible_riders([RiderId.LTC, RiderId.WAIVER], "NY")
        assert kept == [RiderId.WAIVER]
        assert removed == [RiderId.LTC]

    def test_restrictions_read_only(self):
        with pytest.raises(TypeError):
            STATE_RIDER_RESTRICTIONS["CA"] = (RiderId.ADB,)

    def test_other_states_keep_all(self):
        kept, removed = eligible_riders([RiderId.LTC, RiderId.WAIVER], "MI")
        assert kept == [RiderId.LTC, RiderId.WAIVER]
        assert removed == []


class TestPolicyFee:
    """Tests for state policy fees."""

    def test_fee_table_read_only(self):
        with pytest.raises(TypeError):
            STATE_POLICY_FEES["FL"] = 0.0

    @pytest.mark.parametrize("state,fee", [("FL", 8.0), ("NY", 7.0), ("CA", 7.0), ("MI", 6.0), ("TX", 6.0)])
    def test_state_fee(self, state, fee):
        assert state_policy_fee(state) == fee


class TestComputePremium:
    """Tests for compute_premium."""

    def test_term_non_smoker(self, term_inputs):
        """Test 40M non-smoker Term 20 at $500K, monthly."""
        result = compute_premium(term_inputs)
        assert result.base_per_1k == pytest.approx(0.96)
        assert result.factors.age == pytest.approx(1.10)
        assert result.annual == pytest.approx(600.0)
        assert result.billed == pytest.approx(54.0)
        assert result.underwriting.label == "Preferred+"

    def test_term_smoker(self, term_inputs):
        """Test the Term smoker factor."""
        result = compute_premium(term_inputs.model_copy(update={"smoker": "Y"}))
        assert result.annual == pytest.approx(1022.4)
        assert result.billed == pytest.approx(92.016)

    def test_female(self, term_inputs):
        result = compute_premium(term_inputs.model_copy(update={"sex": "F"}))
        assert result.annual == pytest.approx(573.6)

    def test_riders_priced_after_multipliers(self, term_inputs):
        """Test that Waiver is five percent of the multiplied premium, before the fee."""
        result = compute_premium(term_inputs.model_copy(update={"riders": [RiderId.WAIVER]}))
        assert result.annual == pytest.approx(528.0 + 26.4 + 72.0)

    def test_table_rating_applies(self, term_inputs, make_condition):
        """Test that a table rating multiplies the premium."""
        condition = make_condition(exclude=True)
        result = compute_premium(term_inputs.model_copy(update={"conditions": [condition]}))
        assert result.underwriting.multiplier == 1.25
        assert result.annual == pytest.approx(528.0 * 1.25 + 72.0)

    def test_bmi_multiplier_not_applied(self, term_inputs):
        """Test that the BMI band only feeds underwriting."""
        with_build = term_inputs.model_copy(update={"height_inches": 70, "weight_pounds": 180})
        result = compute_premium(with_build)
        assert result.bmi_info.label == "Overweight"
        assert result.annual == pytest.approx(600.0)

    def test_annual_mode(self, term_inputs):
        result = compute_premium(term_inputs.model_copy(update={"modal_factor": 1.0}))
        assert result.billed == pytest.approx(result.annual)

    def test_deterministic(self, term_inputs):
        """Test that identical inputs give identical outputs."""
        assert compute_premium(term_inputs) == compute_premium(term_inputs)

    def test_monotonic_in_death_benefit(self, term_inputs):
        """Test that premium strictly increases with death benefit."""
        billed = [
            compute_premium(term_inputs.model_copy(update={"death_benefit": db})).billed
            for db in (1_000, 50_000, 250_000, 500_000, 1_000_000, 5_000_000)
        ]
        assert billed == sorted(billed)
        assert len(set(billed)) == len(billed)

    def test_step_execute(self, term_inputs):
        assert PremiumCompositionStep().execute(term_inputs).billed == pytest.approx(54.0)
