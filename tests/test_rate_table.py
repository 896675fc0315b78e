"""
Tests for the rate table and rating factors.
"""

import pytest

from atlas_quote.pipeline.models import MODAL_FACTORS, PolicyType
from atlas_quote.pipeline.steps.rate_table import (
    LINEAR_RATES,
    PRODUCT_FACTORS,
    RateLookupStep,
    age_factor,
    base_rate_per_1k,
    conditions_multiplier,
    product_factor,
    smoker_factor,
    term_factor,
)


class TestBaseRate:
    """Tests for base_rate_per_1k."""

    def test_term_linear(self):
        """Test Term at 40."""
        assert base_rate_per_1k(40, "M", "Term") == pytest.approx(0.96)

    def test_term_reference_age(self):
        """Test Term at the reference age."""
        assert base_rate_per_1k(30, "M", PolicyType.TERM) == pytest.approx(0.72)

    def test_floor_applies(self):
        """Test that young ages hit the product floor."""
        assert base_rate_per_1k(18, "M", "Whole") == pytest.approx(0.72)
        assert base_rate_per_1k(18, "M", "Term") == pytest.approx(0.432)

    def test_female_discount(self):
        """Test the five percent female adjustment."""
        assert base_rate_per_1k(40, "F", "Term") == pytest.approx(0.912)

    @pytest.mark.parametrize("age,rate", [
        (45, 1.20), (49, 1.20), (50, 1.68), (65, 2.64), (79, 4.56), (80, 6.24), (95, 6.24),
    ])
    def test_final_expense_bands(self, age, rate):
        """Test Final Expense flat rates by age band."""
        assert base_rate_per_1k(age, "M", PolicyType.FINAL_EXPENSE) == pytest.approx(rate)

    def test_final_expense_label_accepted(self):
        """Test that the display label resolves to the product."""
        assert base_rate_per_1k(55, "F", "Final Expense") == pytest.approx(1.596)

    def test_unknown_product_default(self):
        """Test the default rate with no sex adjustment."""
        assert base_rate_per_1k(40, "F", "Annuity") == pytest.approx(1.20)


class TestFactors:
    """Tests for the independent rating factors."""

    def test_term_factor(self):
        assert term_factor("Term", 30) == pytest.approx(1.10)
        assert term_factor("Term", 20) == 1.0
        assert term_factor("Term", 10) == 1.0
        assert term_factor("Whole", 30) == 1.0

    def test_age_factor(self):
        assert age_factor(25) == 1.0
        assert age_factor(30) == 1.0
        assert age_factor(40) == pytest.approx(1.10)
        assert age_factor(70) == pytest.approx(1.40)

    def test_smoker_factor(self):
        assert smoker_factor("Term", "Y") == 1.8
        assert smoker_factor("Whole", "Y") == 1.6
        assert smoker_factor("FinalExpense", "Y") == 1.6
        assert smoker_factor("Term", "N") == 1.0

    @pytest.mark.parametrize("policy_type,factor", [
        ("Term", 1.00), ("Whole", 1.25), ("UL", 1.15), ("IUL", 1.20),
        ("GUL", 1.10), ("FinalExpense", 1.30), ("Annuity", 1.00),
    ])
    def test_product_factor(self, policy_type, factor):
        assert product_factor(policy_type) == factor

    def test_tables_read_only(self):
        """Test that rate tables cannot be changed at runtime."""
        with pytest.raises(TypeError):
            PRODUCT_FACTORS[PolicyType.TERM] = 0.5
        with pytest.raises(TypeError):
            LINEAR_RATES[PolicyType.TERM] = (0.0, 0.0, 0.0)
        with pytest.raises(TypeError):
            MODAL_FACTORS["Monthly"] = 0.01

    def test_conditions_multiply(self, make_condition):
        """Test that condition multipliers stack in any order."""
        a = make_condition(multiplier=1.05, id="a")
        b = make_condition(multiplier=1.10, id="b")
        assert conditions_multiplier([a, b]) == pytest.approx(1.155)
        assert conditions_multiplier([b, a]) == pytest.approx(conditions_multiplier([a, b]))
        assert conditions_multiplier([]) == 1.0

    def test_factors_never_discount(self, catalog):
        """Test that every factor is at least 1 across products and ages."""
        for policy_type in PolicyType:
            for age in (18, 30, 45, 70, 120):
                for smoker in ("Y", "N"):
                    _, factors = RateLookupStep().execute(
                        age, "F", policy_type, smoker, 30, catalog.items
                    )
                    for value in factors.model_dump().values():
                        assert value >= 1.0


class TestRateLookupStep:
    """Tests for RateLookupStep."""

    def test_base_includes_term_factor(self):
        """Test that the term factor is folded into the base rate."""
        base, factors = RateLookupStep().execute(40, "M", "Term", "N", 30, [])
        assert factors.term == pytest.approx(1.10)
        assert base == pytest.approx(0.96 * 1.10)
