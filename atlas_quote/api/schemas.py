"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime, timezone
from typing import List, Optional, Dict
from pydantic import BaseModel, ConfigDict, Field

from atlas_quote.pipeline.models import ClientProfile, RiderId, TierBreakdown


class QuoteRequest(ClientProfile):
    """Request body for pricing a client profile."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "age": 40,
                "sex": "M",
                "smoker": "N",
                "policy_type": "Term",
                "term": 20,
                "height_inches": 70,
                "weight_pounds": 180,
                "state_code": "MI",
                "selected_conditions": [],
                "selected_riders": [],
                "goal": "DB",
                "death_benefit": 500000,
                "payment_mode": "Monthly",
            }
        },
    )


class PremiumSummaryResponse(BaseModel):
    """Premium details in quote response."""
    underwriting_class: str
    table_rating: Optional[str] = None
    bmi: float
    bmi_band: str
    annual_base_premium: float
    annual_premium: float
    billed_premium: float
    base_rate_per_1k: float
    factors: Dict[str, float] = Field(default_factory=dict)
    multipliers: str


class TierResponse(BaseModel):
    """One plan tier in quote response."""
    name: str
    price: float
    billed: float
    annual: float
    death_benefit: float
    underwriting_class: str
    riders: List[RiderId] = Field(default_factory=list)
    breakdown: TierBreakdown


class QuoteResponse(BaseModel):
    """Response containing the priced quote."""
    success: bool
    death_benefit: Optional[float] = None
    payment_mode: Optional[str] = None
    policy_fee: Optional[float] = None
    premium: Optional[PremiumSummaryResponse] = None
    tiers: List[TierResponse] = Field(default_factory=list)
    plan_summary: Optional[str] = None
    processing_time_seconds: Optional[float] = None
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "death_benefit": 500000,
                "payment_mode": "Monthly",
                "policy_fee": 6.0,
                "premium": {
                    "underwriting_class": "Preferred+",
                    "bmi": 25.8,
                    "bmi_band": "Overweight",
                    "annual_base_premium": 480.0,
                    "annual_premium": 600.0,
                    "billed_premium": 54.0,
                    "base_rate_per_1k": 0.96,
                    "factors": {"age": 1.1, "smoker": 1.0, "product": 1.0, "conditions": 1.0, "term": 1.0},
                    "multipliers": "Age 1.10 · Smoker 1.00 · Product 1.00 · Cond 1.00 · Term 1.00",
                },
                "processing_time_seconds": 0.004,
            }
        }
    )


class SolveResponse(BaseModel):
    """Death benefit solved from a target premium."""
    death_benefit: int
    target_premium: float
    payment_mode: str


class PlanSummaryResponse(BaseModel):
    """Plain-text plan recommendation."""
    success: bool
    text: Optional[str] = None
    errors: List[str] = Field(default_factory=list)


class OptionsResponse(BaseModel):
    """Values accepted by the quote endpoints."""
    states: List[str]
    policy_types: List[Dict[str, str]]
    terms: List[int]
    payment_modes: Dict[str, float]
    riders: List[str]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(default="healthy")
    version: str
    conditions_loaded: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
