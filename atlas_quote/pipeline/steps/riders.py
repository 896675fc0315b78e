"""
Step 4: Rider Pricing
Annualized cost of optional riders and state rider eligibility.
"""

from types import MappingProxyType
from typing import Iterable, List, Tuple

from atlas_quote.pipeline.models import RiderId


# Monthly-equivalent rider pricing
ADB_PER_1K = 0.02       # per $1,000 death benefit
WAIVER_PCT = 0.05       # of annual base premium
CHILD_FLAT = 5.00
LTC_PCT = 0.08          # of annual base premium
LTC_MIN = 10.00

# Riders that may not be sold in a state
STATE_RIDER_RESTRICTIONS = MappingProxyType({
    "NY": (RiderId.LTC,),
})


def rider_cost(riders: Iterable[str], death_benefit: float, base_premium: float) -> float:
    """
    Annual cost of the selected riders.

    Args:
        riders: Selected rider ids
        death_benefit: Face amount in dollars
        base_premium: Annual premium before riders and policy fee

    Returns:
        Annualized rider cost
    """
    includes = {getattr(r, "value", r) for r in riders or ()}
    monthly = 0.0
    if RiderId.ADB.value in includes:
        monthly += (death_benefit / 1000) * ADB_PER_1K
    if RiderId.WAIVER.value in includes:
        monthly += base_premium * WAIVER_PCT / 12
    if RiderId.CHILD.value in includes:
        monthly += CHILD_FLAT
    if RiderId.LTC.value in includes:
        monthly += max(LTC_MIN, base_premium * LTC_PCT / 12)
    return monthly * 12


def eligible_riders(riders: Iterable[RiderId], state_code: str) -> Tuple[List[RiderId], List[RiderId]]:
    """Split riders into (kept, removed) for the client's state."""
    blocked = STATE_RIDER_RESTRICTIONS.get(state_code, ())
    kept, removed = [], []
    for rider in riders:
        (removed if rider in blocked else kept).append(rider)
    return kept, removed
