"""
API routes for the quoting system.
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException

from atlas_quote import __version__
from atlas_quote.config import get_settings
from atlas_quote.core.reference_data import (
    UnknownConditionError,
    get_company_profile,
    get_condition_catalog,
)
from atlas_quote.pipeline.models import (
    Goal,
    InputExport,
    MODAL_FACTORS,
    PolicyType,
    QuoteResult,
    RiderId,
    STATE_OPTIONS,
    TERM_OPTIONS,
)
from atlas_quote.pipeline.orchestrator import QuotePipeline
from atlas_quote.pipeline.steps.quote_summary import (
    build_input_export,
    build_plan_summary_text,
    explain_premium_math,
    format_multipliers,
)
from atlas_quote.api.schemas import (
    QuoteRequest,
    QuoteResponse,
    HealthResponse,
    OptionsResponse,
    PlanSummaryResponse,
    PremiumSummaryResponse,
    SolveResponse,
    TierResponse,
)


logger = logging.getLogger(__name__)
router = APIRouter()


def build_quote_response(result: QuoteResult) -> QuoteResponse:
    """Flatten a pipeline result into the API response shape."""
    if not result.success:
        return QuoteResponse(
            success=False,
            errors=result.errors,
            warnings=result.warnings,
        )

    profile = result.profile
    premium = result.premium
    tiers = [
        TierResponse(
            name=offer.name,
            price=offer.display_price,
            billed=offer.billed,
            annual=offer.annual,
            death_benefit=offer.death_benefit,
            underwriting_class=offer.underwriting_label,
            riders=offer.riders,
            breakdown=offer.breakdown,
        )
        for offer in result.recommendation.tiers
    ]

    return QuoteResponse(
        success=True,
        death_benefit=result.death_benefit,
        payment_mode=profile.payment_mode.value,
        policy_fee=result.policy_fee,
        premium=PremiumSummaryResponse(
            underwriting_class=premium.underwriting.label,
            table_rating=premium.underwriting.table.value if premium.underwriting.table else None,
            bmi=round(premium.bmi_info.bmi, 1),
            bmi_band=premium.bmi_info.label,
            annual_base_premium=result.annual_base_premium,
            annual_premium=premium.annual,
            billed_premium=premium.billed,
            base_rate_per_1k=premium.base_per_1k,
            factors=premium.factors.model_dump(),
            multipliers=format_multipliers(premium, profile.policy_type),
        ),
        tiers=tiers,
        plan_summary=build_plan_summary_text(result.recommendation),
        processing_time_seconds=result.metrics.total_duration_seconds if result.metrics else None,
        warnings=result.warnings,
        errors=result.errors,
    )


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Check the health status of the API and its reference data.
    """
    catalog = get_condition_catalog()
    return HealthResponse(
        status="healthy" if len(catalog) else "degraded",
        version=__version__,
        conditions_loaded=len(catalog),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/api/reference/conditions", tags=["Reference"])
async def list_conditions():
    """
    Condition catalog grouped by category.
    """
    catalog = get_condition_catalog()
    grouped = catalog.by_category()
    return {
        "categories": [
            {
                "id": category.id,
                "label": category.label,
                "items": [item.model_dump() for item in grouped.get(category.id, [])],
            }
            for category in catalog.categories
        ],
        "count": len(catalog),
    }


@router.get("/api/reference/company", tags=["Reference"])
async def company_profile():
    """Branding and contact content."""
    return get_company_profile().model_dump()


@router.get("/api/reference/options", response_model=OptionsResponse, tags=["Reference"])
async def quote_options():
    """Values accepted by the quote endpoints."""
    return OptionsResponse(
        states=list(STATE_OPTIONS),
        policy_types=[{"value": p.value, "label": p.label} for p in PolicyType],
        terms=list(TERM_OPTIONS),
        payment_modes=dict(MODAL_FACTORS),
        riders=[r.value for r in RiderId],
    )


@router.get("/api/reference/premium-math", tags=["Reference"])
async def premium_math():
    """How the premium is calculated."""
    return {"text": explain_premium_math()}


@router.post(
    "/api/quotes",
    response_model=QuoteResponse,
    tags=["Quotes"],
    summary="Price a client profile",
    description="Compute the premium and the Bronze/Silver/Gold recommendation"
)
async def create_quote(request: QuoteRequest):
    """
    Price a client profile.
    Nothing is stored; every call recomputes from the inputs.
    """
    try:
        result = QuotePipeline().process(request)
        return build_quote_response(result)
    except Exception as e:
        logger.exception(f"Error processing quote: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/api/quotes/solve",
    response_model=SolveResponse,
    tags=["Quotes"],
    summary="Solve death benefit",
    description="Find the death benefit whose billed premium matches the target premium"
)
async def solve_death_benefit(request: QuoteRequest):
    """
    Solve for death benefit from a target premium.
    """
    if request.goal != Goal.TARGET_PREMIUM:
        raise HTTPException(status_code=400, detail="Profile goal must be TP to solve for death benefit")

    try:
        death_benefit = QuotePipeline().solve(request)
    except UnknownConditionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error solving death benefit: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return SolveResponse(
        death_benefit=death_benefit,
        target_premium=request.target_premium,
        payment_mode=request.payment_mode.value,
    )


@router.post(
    "/api/quotes/export",
    response_model=InputExport,
    tags=["Quotes"],
    summary="Export client inputs",
    description="Versioned, timestamped record of the client inputs"
)
async def export_inputs(request: QuoteRequest):
    """Return the inputs as a downloadable record."""
    return build_input_export(request, get_settings().export_version)


@router.post(
    "/api/quotes/summary",
    response_model=PlanSummaryResponse,
    tags=["Quotes"],
    summary="Plan summary text",
    description="Plain-text Bronze/Silver/Gold summary for copying into an email"
)
async def plan_summary(request: QuoteRequest):
    """
    Build the plain-text plan summary.
    """
    try:
        result = QuotePipeline().process(request)
    except Exception as e:
        logger.exception(f"Error building plan summary: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if not result.success:
        return PlanSummaryResponse(success=False, errors=result.errors)
    return PlanSummaryResponse(success=True, text=build_plan_summary_text(result.recommendation))
