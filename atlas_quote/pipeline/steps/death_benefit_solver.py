"""
Step 5b: Death-Benefit Solver
Finds the death benefit whose billed premium matches a target.
"""

import math

from atlas_quote.pipeline.models import PricingInputs, MIN_DEATH_BENEFIT
from atlas_quote.pipeline.steps.premium_composer import compute_premium


SEARCH_MIN = 1_000
SEARCH_MAX = 5_000_000
# Fixed so every solve costs the same; 40 halvings of $5M is far below $1
ITERATIONS = 40


def round_death_benefit(amount: float) -> int:
    """Nearest $1,000 (halves round up), never below $1,000."""
    return max(MIN_DEATH_BENEFIT, int(math.floor(amount / 1000 + 0.5)) * 1000)


def solve_death_benefit_exact(target_premium: float, inputs: PricingInputs) -> float:
    """
    Bisect for the largest death benefit whose billed premium does not
    exceed the target. Billed premium is non-decreasing in death benefit.

    Targets outside the reachable range return the nearest search bound.
    """
    lo, hi = float(SEARCH_MIN), float(SEARCH_MAX)
    answer = lo
    for _ in range(ITERATIONS):
        mid = (lo + hi) / 2
        result = compute_premium(inputs.model_copy(update={"death_benefit": mid}))
        if result.billed > target_premium:
            hi = mid
        else:
            answer = mid
            lo = mid
    return answer


def solve_death_benefit(target_premium: float, inputs: PricingInputs) -> int:
    """Death benefit for a target billed premium, rounded to $1,000."""
    return round_death_benefit(solve_death_benefit_exact(target_premium, inputs))


class DeathBenefitSolverStep:
    """
    Inverts the premium composer for target-premium quotes.
    """

    def execute(self, target_premium: float, inputs: PricingInputs) -> int:
        """
        Solve for death benefit.

        Args:
            target_premium: Billed premium in the client's payment mode
            inputs: Pricing inputs; death_benefit is ignored

        Returns:
            Death benefit in dollars, a multiple of $1,000
        """
        return solve_death_benefit(target_premium, inputs)
