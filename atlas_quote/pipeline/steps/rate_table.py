"""
Step 3: Rate Table
Base annual rates per $1,000 of death benefit and the independent
age, smoker, product and term factors.
"""

from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from atlas_quote.pipeline.models import Condition, PolicyType, Sex, SmokerStatus, PremiumFactors


# Linear-in-age products: (rate at age 30, slope per year, floor), annual per $1,000
LINEAR_RATES: Mapping[PolicyType, Tuple[float, float, float]] = MappingProxyType({
    PolicyType.TERM: (0.72, 0.024, 0.36),
    PolicyType.WHOLE: (1.20, 0.048, 0.72),
    PolicyType.UL: (1.08, 0.042, 0.66),
    PolicyType.IUL: (1.14, 0.042, 0.72),
    PolicyType.GUL: (1.02, 0.036, 0.60),
})

# Final Expense is flat within each age band: (age below, annual rate)
FINAL_EXPENSE_RATES = (
    (50, 1.20),
    (60, 1.68),
    (70, 2.64),
    (80, 4.56),
)
FINAL_EXPENSE_TOP_RATE = 6.24

DEFAULT_BASE_RATE = 1.20
FEMALE_ADJUSTMENT = 0.95

PRODUCT_FACTORS: Mapping[PolicyType, float] = MappingProxyType({
    PolicyType.TERM: 1.00,
    PolicyType.WHOLE: 1.25,
    PolicyType.UL: 1.15,
    PolicyType.IUL: 1.20,
    PolicyType.GUL: 1.10,
    PolicyType.FINAL_EXPENSE: 1.30,
})

TERM_SMOKER_FACTOR = 1.8
PERMANENT_SMOKER_FACTOR = 1.6

REFERENCE_AGE = 30
REFERENCE_TERM = 20


def _as_policy(policy_type):
    try:
        return PolicyType(policy_type)
    except ValueError:
        return None


def _sex_adjustment(sex: str) -> float:
    return FEMALE_ADJUSTMENT if sex == Sex.FEMALE else 1.00


def base_rate_per_1k(age: int, sex: str, policy_type: str) -> float:
    """Annual base rate per $1,000 of death benefit."""
    sex_adj = _sex_adjustment(sex)
    product = _as_policy(policy_type)

    if product in LINEAR_RATES:
        at_reference, slope, floor = LINEAR_RATES[product]
        return max(floor, at_reference + slope * (age - REFERENCE_AGE)) * sex_adj

    if product == PolicyType.FINAL_EXPENSE:
        for below, rate in FINAL_EXPENSE_RATES:
            if age < below:
                return rate * sex_adj
        return FINAL_EXPENSE_TOP_RATE * sex_adj

    return DEFAULT_BASE_RATE


def term_factor(policy_type: str, term: int) -> float:
    """One percent per year of term beyond 20; Term products only."""
    if _as_policy(policy_type) != PolicyType.TERM:
        return 1.00
    return 1 + max(0, term - REFERENCE_TERM) * 0.01


def age_factor(age: int) -> float:
    return 1 + max(0, age - REFERENCE_AGE) * 0.01


def smoker_factor(policy_type: str, smoker: str) -> float:
    if smoker != SmokerStatus.SMOKER:
        return 1.0
    return TERM_SMOKER_FACTOR if _as_policy(policy_type) == PolicyType.TERM else PERMANENT_SMOKER_FACTOR


def product_factor(policy_type: str) -> float:
    return PRODUCT_FACTORS.get(_as_policy(policy_type), 1.00)


def conditions_multiplier(conditions: Iterable[Condition]) -> float:
    """Condition multipliers stack multiplicatively."""
    result = 1.00
    for condition in conditions:
        result *= condition.multiplier or 1.00
    return result


class RateLookupStep:
    """
    Looks up the base rate and rating factors for a client.
    """

    def execute(
        self,
        age: int,
        sex: str,
        policy_type: str,
        smoker: str,
        term: int,
        conditions: Iterable[Condition],
    ) -> Tuple[float, PremiumFactors]:
        """
        Find the rate inputs for a premium computation.

        Returns:
            (annual base rate per $1,000 including the term factor, named factors)
        """
        t_factor = term_factor(policy_type, term)
        factors = PremiumFactors(
            age=age_factor(age),
            smoker=smoker_factor(policy_type, smoker),
            product=product_factor(policy_type),
            conditions=conditions_multiplier(conditions),
            term=t_factor,
        )
        return base_rate_per_1k(age, sex, policy_type) * t_factor, factors
