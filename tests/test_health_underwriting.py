"""
Tests for BMI assessment and underwriting classification.
"""

import math

import pytest

from atlas_quote.pipeline.models import BmiInfo, TableRating
from atlas_quote.pipeline.steps.health_assessment import (
    HealthAssessmentStep,
    bmi_band,
    bmi_from_inches_pounds,
)
from atlas_quote.pipeline.steps.underwriting import (
    TABLE_MULTIPLIERS,
    UnderwritingStep,
    count_drops,
    determine_uw_class,
)


NO_BMI = BmiInfo(bmi=0.0, drop=0, multiplier=1.0, label="—")


class TestBmi:
    """Tests for BMI calculation and banding."""

    def test_imperial_formula(self):
        """Test 70 in / 180 lb."""
        assert bmi_from_inches_pounds(70, 180) == pytest.approx(25.82, abs=0.01)

    @pytest.mark.parametrize("height,weight", [(0, 180), (70, 0), (0, 0)])
    def test_missing_measurement_gives_zero(self, height, weight):
        """Test that a missing height or weight yields BMI 0."""
        assert bmi_from_inches_pounds(height, weight) == 0.0

    def test_zero_bmi_band(self):
        """Test that BMI 0 has no drop and a placeholder label."""
        info = bmi_band(0)
        assert info.drop == 0
        assert info.multiplier == 1.0
        assert info.label == "—"

    def test_nan_bmi_band(self):
        """Test that a NaN BMI is treated as unknown."""
        info = bmi_band(math.nan)
        assert info.bmi == 0.0
        assert info.drop == 0

    @pytest.mark.parametrize("bmi,label,drop,multiplier", [
        (17.0, "Underweight", 0, 1.03),
        (18.5, "Healthy", 0, 1.00),
        (24.99, "Healthy", 0, 1.00),
        (25.0, "Overweight", 0, 1.05),
        (30.0, "Obesity I", 1, 1.10),
        (35.0, "Obesity II", 2, 1.20),
        (40.0, "Obesity III", 3, 1.35),
        (55.0, "Obesity III", 3, 1.35),
    ])
    def test_band_boundaries(self, bmi, label, drop, multiplier):
        """Test that lower band bounds are inclusive."""
        info = bmi_band(bmi)
        assert info.label == label
        assert info.drop == drop
        assert info.multiplier == multiplier

    def test_step_execute(self):
        """Test the health assessment step end to end."""
        info = HealthAssessmentStep().execute(70, 180)
        assert info.label == "Overweight"
        assert info.bmi == pytest.approx(25.82, abs=0.01)


class TestUnderwriting:
    """Tests for underwriting classification."""

    def test_no_conditions_is_preferred_plus(self):
        """Test the best class with a clean history."""
        result = determine_uw_class([], NO_BMI)
        assert result.label == "Preferred+"
        assert result.table is None
        assert result.multiplier == 1.0

    def test_one_drop_is_preferred(self, make_condition):
        """Test a single drop."""
        result = determine_uw_class([make_condition(class_drop=1)], NO_BMI)
        assert result.label == "Preferred"

    def test_two_drops_is_standard(self, make_condition):
        """Test two drops across conditions."""
        conditions = [make_condition(class_drop=1, id="a"), make_condition(class_drop=1, id="b")]
        result = determine_uw_class(conditions, NO_BMI)
        assert result.label == "Standard"
        assert result.multiplier == 1.0

    def test_exclude_alone_is_table_a(self, make_condition):
        """Test that an excluded condition with no drops rates Table A."""
        result = determine_uw_class([make_condition(exclude=True)], NO_BMI)
        assert result.label == "Substandard (Table A)"
        assert result.table == TableRating.A
        assert result.multiplier == 1.25

    @pytest.mark.parametrize("drops,table,multiplier", [
        (3, TableRating.A, 1.25),
        (4, TableRating.B, 1.50),
        (5, TableRating.C, 1.75),
        (6, TableRating.D, 2.00),
        (9, TableRating.D, 2.00),
    ])
    def test_table_progression(self, make_condition, drops, table, multiplier):
        """Test that tables advance one letter per drop beyond two and stop at D."""
        result = determine_uw_class([make_condition(class_drop=drops)], NO_BMI)
        assert result.table == table
        assert result.multiplier == multiplier

    def test_table_multipliers_read_only(self):
        with pytest.raises(TypeError):
            TABLE_MULTIPLIERS[TableRating.A] = 1.0

    def test_exclude_with_drops(self, make_condition):
        """Test that exclusion does not cap the table."""
        result = determine_uw_class([make_condition(class_drop=4, exclude=True)], NO_BMI)
        assert result.table == TableRating.B

    def test_bmi_drop_counts(self, make_condition):
        """Test that a BMI band drop adds to condition drops."""
        bmi_info = bmi_band(41.0)
        assert count_drops([], bmi_info) == 3
        result = determine_uw_class([], bmi_info)
        assert result.table == TableRating.A

        result = determine_uw_class([make_condition(class_drop=1)], bmi_band(36.0))
        assert result.table == TableRating.A

    def test_catalog_conditions(self, catalog):
        """Test classification with catalog entries."""
        result = determine_uw_class(catalog.resolve(["diabetes_t2"]), NO_BMI)
        assert result.label == "Standard"

        result = determine_uw_class(catalog.resolve(["copd"]), NO_BMI)
        assert result.table == TableRating.A

    def test_step_logs_refer_conditions(self, catalog, caplog):
        """Test that refer conditions are logged."""
        with caplog.at_level("INFO"):
            UnderwritingStep().execute(catalog.resolve(["heart_attack"]), NO_BMI)
        assert "Heart attack" in caplog.text
