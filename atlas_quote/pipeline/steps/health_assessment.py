"""
Step 1: Health Assessment
Derives body-mass index from height/weight and maps it to a rating band.
"""

from atlas_quote.pipeline.models import BmiInfo


# (upper bound exclusive, drop, multiplier, label); last band is open-ended
BMI_BANDS = (
    (18.5, 0, 1.03, "Underweight"),
    (25.0, 0, 1.00, "Healthy"),
    (30.0, 0, 1.05, "Overweight"),
    (35.0, 1, 1.10, "Obesity I"),
    (40.0, 2, 1.20, "Obesity II"),
    (float("inf"), 3, 1.35, "Obesity III"),
)


def bmi_from_inches_pounds(height_inches: float, weight_pounds: float) -> float:
    """Imperial BMI; 0 means height or weight was not provided."""
    if not height_inches or not weight_pounds:
        return 0.0
    return (weight_pounds / (height_inches * height_inches)) * 703


def bmi_band(bmi: float) -> BmiInfo:
    """Look up the rating band for a BMI value."""
    if not bmi:
        return BmiInfo(bmi=0.0, drop=0, multiplier=1.00, label="—")
    for upper, drop, multiplier, label in BMI_BANDS:
        if bmi < upper:
            return BmiInfo(bmi=bmi, drop=drop, multiplier=multiplier, label=label)
    # NaN compares false against every bound
    return BmiInfo(bmi=0.0, drop=0, multiplier=1.00, label="—")


class HealthAssessmentStep:
    """
    Computes BMI for a client and rates it.
    """

    def execute(self, height_inches: float, weight_pounds: float) -> BmiInfo:
        """
        Assess build.

        Args:
            height_inches: Height in inches (0 when unknown)
            weight_pounds: Weight in pounds (0 when unknown)

        Returns:
            BmiInfo with the BMI band's drop and multiplier
        """
        return bmi_band(bmi_from_inches_pounds(height_inches, weight_pounds))
