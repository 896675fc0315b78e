"""
Quoting pipeline components.
"""

from .models import (
    ClientProfile,
    Condition,
    BmiInfo,
    UnderwritingResult,
    PricingInputs,
    PremiumResult,
    TierOffer,
    PlanRecommendation,
    QuoteResult,
)

__all__ = [
    "ClientProfile",
    "Condition",
    "BmiInfo",
    "UnderwritingResult",
    "PricingInputs",
    "PremiumResult",
    "TierOffer",
    "PlanRecommendation",
    "QuoteResult",
]
