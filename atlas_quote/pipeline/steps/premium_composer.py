"""
Step 5: Premium Composition
Combines base rate, multipliers, riders and policy fee into an annual
premium, then converts it to the billed (modal) amount.
"""

from types import MappingProxyType

from atlas_quote.pipeline.models import PricingInputs, PremiumResult
from atlas_quote.pipeline.steps.health_assessment import HealthAssessmentStep
from atlas_quote.pipeline.steps.underwriting import determine_uw_class
from atlas_quote.pipeline.steps.rate_table import RateLookupStep
from atlas_quote.pipeline.steps.riders import rider_cost


STATE_POLICY_FEES = MappingProxyType({"FL": 8.0, "NY": 7.0, "CA": 7.0, "MI": 6.0})
DEFAULT_POLICY_FEE = 6.0


def state_policy_fee(state_code: str) -> float:
    """Monthly-equivalent policy fee for a state."""
    return STATE_POLICY_FEES.get(state_code, DEFAULT_POLICY_FEE)


def compute_premium(inputs: PricingInputs) -> PremiumResult:
    """
    Price one death benefit.

    Riders are priced on the annual premium after every multiplier and
    before the policy fee. No input validation happens here; callers clamp
    age and death benefit first.
    """
    base_per_1k, factors = RateLookupStep().execute(
        inputs.age,
        inputs.sex,
        inputs.policy_type,
        inputs.smoker,
        inputs.term,
        inputs.conditions,
    )
    base = (inputs.death_benefit / 1000) * base_per_1k

    bmi_info = HealthAssessmentStep().execute(inputs.height_inches, inputs.weight_pounds)
    uw = determine_uw_class(inputs.conditions, bmi_info)

    annual = (
        base
        * factors.age
        * factors.smoker
        * factors.product
        * factors.conditions
        * uw.multiplier
    )
    annual += rider_cost(inputs.riders, inputs.death_benefit, annual)
    annual += inputs.policy_fee * 12

    return PremiumResult(
        annual=annual,
        billed=annual * inputs.modal_factor,
        base_per_1k=base_per_1k,
        underwriting=uw,
        bmi_info=bmi_info,
        factors=factors,
    )


class PremiumCompositionStep:
    """
    Computes the premium for a fixed death benefit.
    """

    def execute(self, inputs: PricingInputs) -> PremiumResult:
        """
        Calculate annual and billed premium.

        Args:
            inputs: Resolved pricing inputs

        Returns:
            PremiumResult with underwriting, BMI band and factors
        """
        return compute_premium(inputs)
