"""
Pipeline Orchestrator
Coordinates the quoting steps for one client profile.
"""

import time
import logging
from typing import Optional, Callable

from atlas_quote.core.reference_data import ConditionCatalog, get_condition_catalog
from atlas_quote.pipeline.models import (
    ClientProfile,
    Goal,
    PipelineMetrics,
    PricingInputs,
    QuoteResult,
)
from atlas_quote.pipeline.steps import (
    HealthAssessmentStep,
    UnderwritingStep,
    PremiumCompositionStep,
    DeathBenefitSolverStep,
    PlanTieringStep,
)
from atlas_quote.pipeline.steps.premium_composer import state_policy_fee
from atlas_quote.pipeline.steps.death_benefit_solver import round_death_benefit
from atlas_quote.pipeline.steps.plan_tiering import TierSpec, tier_specs
from atlas_quote.pipeline.steps.riders import eligible_riders


logger = logging.getLogger(__name__)

TOTAL_STEPS = 6


def build_pricing_inputs(
    profile: ClientProfile,
    catalog: ConditionCatalog,
    death_benefit: float = 0.0,
) -> PricingInputs:
    """
    Resolve a profile into composer inputs.
    Unknown condition ids raise UnknownConditionError; LTC is dropped where
    the state does not allow it. A requested death benefit is rounded to the
    nearest $1,000; 0 leaves it for the solver.
    """
    riders, _ = eligible_riders(profile.selected_riders, profile.state_code)
    return PricingInputs(
        death_benefit=round_death_benefit(death_benefit) if death_benefit else 0.0,
        age=profile.age,
        sex=profile.sex,
        policy_type=profile.policy_type,
        smoker=profile.smoker,
        term=profile.term,
        conditions=catalog.resolve(profile.selected_conditions),
        riders=riders,
        policy_fee=state_policy_fee(profile.state_code),
        modal_factor=profile.modal_factor,
        height_inches=profile.height_inches,
        weight_pounds=profile.weight_pounds,
    )


class QuotePipeline:
    """
    Orchestrates the quoting pipeline.
    Handles execution, error recovery, and progress tracking.
    """

    def __init__(
        self,
        catalog: Optional[ConditionCatalog] = None,
        progress_callback: Optional[Callable[[int, str, str], None]] = None
    ):
        """
        Initialize the pipeline.

        Args:
            catalog: Condition catalog (uses the loaded reference data if not provided)
            progress_callback: Optional callback for progress updates
                             (step_number, step_name, status)
        """
        self.catalog = catalog if catalog is not None else get_condition_catalog()
        self.progress_callback = progress_callback

        self.steps = {
            "health_assessment": HealthAssessmentStep(),
            "underwriting": UnderwritingStep(),
            "death_benefit_solver": DeathBenefitSolverStep(),
            "premium_composition": PremiumCompositionStep(),
            "plan_tiering": PlanTieringStep(),
        }

    def _report_progress(self, step: int, name: str, status: str):
        """Report progress if callback is set."""
        if self.progress_callback:
            self.progress_callback(step, name, status)

    def _tier_specs(self, profile: ClientProfile, warnings: list) -> list:
        """Tier definitions with state rider restrictions applied."""
        specs = []
        for spec in tier_specs(profile.selected_riders):
            kept, removed = eligible_riders(spec.riders, profile.state_code)
            if removed:
                names = ", ".join(r.value for r in removed)
                warnings.append(f"{names} rider not available in {profile.state_code}; removed from {spec.name}")
            specs.append(TierSpec(spec.name, spec.multiplier, tuple(kept)))
        return specs

    def solve(self, profile: ClientProfile) -> int:
        """Death benefit for a target-premium profile."""
        inputs = build_pricing_inputs(profile, self.catalog)
        return self.steps["death_benefit_solver"].execute(profile.target_premium, inputs)

    def process(self, profile: ClientProfile) -> QuoteResult:
        """
        Quote a client profile end to end.

        Args:
            profile: Validated client inputs

        Returns:
            QuoteResult with premium, plan tiers and metrics
        """
        start_time = time.time()
        step_durations = {}
        errors = []
        warnings = []

        result = QuoteResult(success=False, profile=profile)

        try:
            # Step 1: Resolve inputs
            self._report_progress(1, "Resolve Inputs", "running")
            step_start = time.time()
            inputs = build_pricing_inputs(profile, self.catalog, profile.death_benefit or 0.0)
            _, removed = eligible_riders(profile.selected_riders, profile.state_code)
            if removed:
                warnings.append(
                    f"{', '.join(r.value for r in removed)} rider not available in {profile.state_code}"
                )
            step_durations["resolve_inputs"] = time.time() - step_start
            result.conditions = inputs.conditions
            result.riders_applied = inputs.riders
            result.policy_fee = inputs.policy_fee
            result.modal_factor = inputs.modal_factor
            self._report_progress(1, "Resolve Inputs", "complete")
            logger.info(f"Step 1 complete: {len(inputs.conditions)} conditions, riders {[r.value for r in inputs.riders]}")

            # Step 2: Health Assessment
            self._report_progress(2, "Health Assessment", "running")
            step_start = time.time()
            bmi_info = self.steps["health_assessment"].execute(
                profile.height_inches, profile.weight_pounds
            )
            step_durations["health_assessment"] = time.time() - step_start
            self._report_progress(2, "Health Assessment", "complete")
            logger.info(f"Step 2 complete: BMI {bmi_info.bmi:.1f} ({bmi_info.label})")

            # Step 3: Underwriting
            self._report_progress(3, "Underwriting", "running")
            step_start = time.time()
            uw = self.steps["underwriting"].execute(inputs.conditions, bmi_info)
            step_durations["underwriting"] = time.time() - step_start
            if uw.table is not None:
                warnings.append(f"{uw.label} - refer to underwriting")
            self._report_progress(3, "Underwriting", "complete")
            logger.info(f"Step 3 complete: {uw.label}")

            # Step 4: Death Benefit
            self._report_progress(4, "Death Benefit", "running")
            step_start = time.time()
            death_benefit = inputs.death_benefit
            if profile.goal == Goal.TARGET_PREMIUM and profile.target_premium:
                death_benefit = self.steps["death_benefit_solver"].execute(
                    profile.target_premium, inputs
                )
                inputs = inputs.model_copy(update={"death_benefit": death_benefit})
            step_durations["death_benefit"] = time.time() - step_start
            result.death_benefit = death_benefit
            self._report_progress(4, "Death Benefit", "complete")
            logger.info(f"Step 4 complete: Death benefit ${death_benefit:,.0f}")

            # Step 5: Premium
            self._report_progress(5, "Premium Composition", "running")
            step_start = time.time()
            premium = self.steps["premium_composition"].execute(inputs)
            step_durations["premium_composition"] = time.time() - step_start
            result.premium = premium
            result.annual_base_premium = (death_benefit / 1000) * premium.base_per_1k
            self._report_progress(5, "Premium Composition", "complete")
            logger.info(f"Step 5 complete: Billed ${premium.billed:,.2f} ({profile.payment_mode.value})")

            # Step 6: Plan Tiers
            self._report_progress(6, "Plan Tiering", "running")
            step_start = time.time()
            recommendation = self.steps["plan_tiering"].execute(
                inputs,
                profile.goal,
                profile.payment_mode,
                self._tier_specs(profile, warnings),
                target_premium=profile.target_premium or 0.0,
            )
            step_durations["plan_tiering"] = time.time() - step_start
            result.recommendation = recommendation
            self._report_progress(6, "Plan Tiering", "complete")
            logger.info(f"Step 6 complete: {len(recommendation.tiers)} tiers priced")

            result.success = True

        except Exception as e:
            logger.exception(f"Pipeline error: {e}")
            errors.append(str(e))
            result.success = False

        total_duration = time.time() - start_time
        result.metrics = PipelineMetrics(
            total_duration_seconds=round(total_duration, 4),
            step_durations={k: round(v, 4) for k, v in step_durations.items()},
        )
        result.errors = errors
        result.warnings = warnings

        return result
