"""
Step 6: Plan Tiering
Builds the Bronze/Silver/Gold recommendation from one base profile.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from atlas_quote.pipeline.models import (
    Goal,
    PaymentMode,
    PlanRecommendation,
    PricingInputs,
    RiderId,
    TierBreakdown,
    TierOffer,
)
from atlas_quote.pipeline.steps.premium_composer import compute_premium
from atlas_quote.pipeline.steps.death_benefit_solver import solve_death_benefit


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierSpec:
    """Tier multiplier and rider set before eligibility filtering."""
    name: str
    multiplier: float
    riders: Tuple[RiderId, ...]


BRONZE_MULTIPLIER = 0.95
SILVER_MULTIPLIER = 1.00
GOLD_MULTIPLIER = 1.08
GOLD_RIDERS = (RiderId.WAIVER, RiderId.LTC)


def tier_specs(selected_riders: Sequence[RiderId]) -> List[TierSpec]:
    """
    Bronze carries no riders, Silver the caller's riders (Waiver when none),
    Gold Waiver and LTC plus the caller's riders.
    """
    selected = tuple(selected_riders)
    return [
        TierSpec("Bronze", BRONZE_MULTIPLIER, ()),
        TierSpec("Silver", SILVER_MULTIPLIER, selected or (RiderId.WAIVER,)),
        TierSpec("Gold", GOLD_MULTIPLIER, tuple(dict.fromkeys(GOLD_RIDERS + selected))),
    ]


def build_tier(
    spec: TierSpec,
    inputs: PricingInputs,
    goal: Goal,
    payment_mode: PaymentMode,
    target_premium: float = 0.0,
) -> TierOffer:
    """
    Price a single tier.

    For target-premium quotes the multiplier scales the premium target and
    the tier solves for its own death benefit. For target-death-benefit
    quotes the multiplier scales the billed premium at the shared death
    benefit.
    """
    tier_inputs = inputs.model_copy(update={"riders": list(spec.riders)})

    if goal == Goal.TARGET_PREMIUM:
        billed = target_premium * spec.multiplier
        death_benefit = solve_death_benefit(billed, tier_inputs)
        result = compute_premium(tier_inputs.model_copy(update={"death_benefit": death_benefit}))
    else:
        death_benefit = inputs.death_benefit
        result = compute_premium(tier_inputs)
        billed = result.billed * spec.multiplier

    annual = billed / payment_mode.modal_factor

    return TierOffer(
        name=spec.name,
        multiplier=spec.multiplier,
        riders=list(spec.riders),
        death_benefit=death_benefit,
        billed=billed,
        annual=annual,
        display_price=billed if payment_mode == PaymentMode.MONTHLY else annual,
        underwriting_label=result.underwriting.label,
        breakdown=TierBreakdown(
            mode=payment_mode,
            tier_multiplier=spec.multiplier,
            product=result.factors.product,
            age=result.factors.age,
            smoker=result.factors.smoker,
            conditions=result.factors.conditions,
            policy_fee=inputs.policy_fee,
        ),
    )


class PlanTieringStep:
    """
    Produces three comparable offers.
    """

    def execute(
        self,
        inputs: PricingInputs,
        goal: Goal,
        payment_mode: PaymentMode,
        specs: List[TierSpec],
        target_premium: float = 0.0,
    ) -> PlanRecommendation:
        """
        Price every tier.

        Args:
            inputs: Pricing inputs at the quoted death benefit
            goal: Target death benefit or target premium
            payment_mode: Billing mode for display
            specs: Tier definitions, already filtered for rider eligibility
            target_premium: Billed premium target (TP goal only)

        Returns:
            PlanRecommendation with one TierOffer per spec
        """
        tiers = [
            build_tier(spec, inputs, goal, payment_mode, target_premium)
            for spec in specs
        ]
        for offer in tiers:
            logger.debug(f"{offer.name}: billed ${offer.billed:,.2f}, DB ${offer.death_benefit:,.0f}")
        return PlanRecommendation(goal=goal, payment_mode=payment_mode, tiers=tiers)
