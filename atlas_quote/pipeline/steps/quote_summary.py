"""
Step 7: Quote Summary
Text and export records handed to the presentation layer.
"""

import math
from datetime import datetime, timezone
from typing import Optional

from atlas_quote.pipeline.models import (
    ClientProfile,
    InputExport,
    PlanRecommendation,
    PolicyType,
    PremiumResult,
)


PREMIUM_MATH_EXPLAINER = """Premium math (annual base → modal):
base = (DB/1k) × base_rate_per_1k(age, sex, product)
premium = base × age × smoker × product × conditions × UW
+ riders (annualized) + policy fee × 12
Modal billed = annual × modal_factor

Examples (annual per $1k):
Term(20): 0.72 + 0.024×(age-30) (min 0.36)
Whole: 1.20 + 0.048×(age-30) (min 0.72)
Final Expense: flat by decade (50s: 1.68; 60s: 2.64; 70s: 4.56)"""


def money(amount: float, cents: bool = True) -> str:
    """US currency, e.g. $1,234.56 or $500,000."""
    value = amount if amount is not None and math.isfinite(amount) else 0.0
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{2 if cents else 0}f}"


def explain_premium_math() -> str:
    return PREMIUM_MATH_EXPLAINER


def format_multipliers(result: PremiumResult, policy_type: str) -> str:
    """One-line factor summary, e.g. "Age 1.10 · Smoker 1.00 · Product 1.00 · Cond 1.00"."""
    f = result.factors
    text = (
        f"Age {f.age:.2f} · Smoker {f.smoker:.2f} · "
        f"Product {f.product:.2f} · Cond {f.conditions:.2f}"
    )
    if policy_type == PolicyType.TERM:
        text += f" · Term {f.term:.2f}"
    return text


def build_input_export(
    profile: ClientProfile,
    version_tag: str,
    now: Optional[datetime] = None,
) -> InputExport:
    """Versioned, timestamped record of the client inputs."""
    return InputExport(
        version=version_tag,
        timestamp=now or datetime.now(timezone.utc),
        inputs=profile,
    )


def build_plan_summary_text(recommendation: PlanRecommendation) -> str:
    """Plain-text recommendation suitable for pasting into an email."""
    lines = [f"Recommendation ({recommendation.payment_mode.value})"]
    for offer in recommendation.tiers:
        lines.append(
            f"{offer.name}: {money(offer.display_price)}, "
            f"DB {money(offer.death_benefit, cents=False)}, {offer.underwriting_label}"
        )
    return "\n".join(lines)
