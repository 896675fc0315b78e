"""
Pipeline steps for the quoting process.
Each step is a self-contained module that performs a specific task.
"""

from .health_assessment import HealthAssessmentStep
from .underwriting import UnderwritingStep
from .rate_table import RateLookupStep
from .premium_composer import PremiumCompositionStep
from .death_benefit_solver import DeathBenefitSolverStep
from .plan_tiering import PlanTieringStep

__all__ = [
    "HealthAssessmentStep",
    "UnderwritingStep",
    "RateLookupStep",
    "PremiumCompositionStep",
    "DeathBenefitSolverStep",
    "PlanTieringStep",
]
