"""
Pydantic models for the quoting pipeline.
These models define the data structures passed between pipeline steps.
"""

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Fixed conversion from ANNUAL premium to the billed (modal) amount
MODAL_FACTORS: Mapping[str, float] = MappingProxyType({
    "Annual": 1.00,
    "Semiannual": 0.52,
    "Quarterly": 0.27,
    "Monthly": 0.09,
})

STATE_OPTIONS = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA",
    "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ", "NM", "NY", "NC", "ND", "OH", "OK",
    "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "DC",
)
TERM_OPTIONS = (10, 15, 20, 25, 30)

AGE_MIN = 18
AGE_MAX = 120
MIN_DEATH_BENEFIT = 1_000


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"


class SmokerStatus(str, Enum):
    SMOKER = "Y"
    NON_SMOKER = "N"


class PolicyType(str, Enum):
    """Product lines offered by the quoting engine."""
    TERM = "Term"
    WHOLE = "Whole"
    UL = "UL"
    IUL = "IUL"
    GUL = "GUL"
    FINAL_EXPENSE = "FinalExpense"

    @property
    def label(self) -> str:
        return "Final Expense" if self is PolicyType.FINAL_EXPENSE else self.value

    @classmethod
    def _missing_(cls, value):
        # Accept display labels such as "Final Expense"
        if isinstance(value, str):
            for member in cls:
                if value.lower() in (member.value.lower(), member.label.lower()):
                    return member
        return None


class PaymentMode(str, Enum):
    ANNUAL = "Annual"
    SEMIANNUAL = "Semiannual"
    QUARTERLY = "Quarterly"
    MONTHLY = "Monthly"

    @property
    def modal_factor(self) -> float:
        return MODAL_FACTORS[self.value]


class Goal(str, Enum):
    """Which input drives pricing."""
    TARGET_DEATH_BENEFIT = "DB"
    TARGET_PREMIUM = "TP"


class RiderId(str, Enum):
    ADB = "ADB"
    WAIVER = "Waiver"
    CHILD = "Child"
    LTC = "LTC"


class TableRating(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Condition(BaseModel):
    """Health condition from the reference catalog."""
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    category: str
    class_drop: int = Field(default=0, ge=0, description="Mortality rating steps")
    exclude: bool = Field(default=False, description="Forces a substandard/refer outcome")
    multiplier: float = Field(default=1.0, ge=1.0)
    tooltip: Optional[str] = Field(default=None)


class ConditionCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str


class BmiInfo(BaseModel):
    """Step 1: Body-mass index and its rating band."""
    model_config = ConfigDict(frozen=True)

    bmi: float = Field(default=0.0, description="0 when height or weight was not provided")
    drop: int = Field(ge=0)
    multiplier: float = Field(ge=1.0)
    label: str


class UnderwritingResult(BaseModel):
    """Step 2: Rate class or substandard table rating."""
    model_config = ConfigDict(frozen=True)

    label: str
    table: Optional[TableRating] = Field(default=None)
    multiplier: float = Field(ge=1.0)


class PremiumFactors(BaseModel):
    """Named multipliers applied to the base premium."""
    model_config = ConfigDict(frozen=True)

    age: float
    smoker: float
    product: float
    conditions: float
    term: float


class PricingInputs(BaseModel):
    """Everything the premium composer needs for one computation."""
    model_config = ConfigDict(frozen=True)

    death_benefit: float
    age: int
    sex: Sex
    policy_type: PolicyType
    smoker: SmokerStatus = SmokerStatus.NON_SMOKER
    term: int = 20
    conditions: List[Condition] = Field(default_factory=list)
    riders: List[RiderId] = Field(default_factory=list)
    policy_fee: float = Field(default=0.0, description="Monthly-equivalent policy fee")
    modal_factor: float = Field(default=1.0)
    height_inches: float = 0.0
    weight_pounds: float = 0.0


class PremiumResult(BaseModel):
    """Step 5: Annual and billed premium with its derivation."""
    model_config = ConfigDict(frozen=True)

    annual: float
    billed: float
    base_per_1k: float = Field(description="Annual base rate per $1,000 including the term factor")
    underwriting: UnderwritingResult
    bmi_info: BmiInfo
    factors: PremiumFactors


class ClientProfile(BaseModel):
    """Client attributes supplied by the caller."""
    model_config = ConfigDict(frozen=True)

    age: int = Field(description=f"Clamped to {AGE_MIN}-{AGE_MAX}")
    sex: Sex = Sex.MALE
    smoker: SmokerStatus = SmokerStatus.NON_SMOKER
    policy_type: PolicyType = PolicyType.TERM
    term: int = Field(default=20, description="Only meaningful for Term")
    height_inches: float = Field(default=0.0, ge=0)
    weight_pounds: float = Field(default=0.0, ge=0)
    state_code: str = Field(default="MI")
    selected_conditions: List[str] = Field(default_factory=list)
    selected_riders: List[RiderId] = Field(default_factory=list)
    goal: Goal = Goal.TARGET_DEATH_BENEFIT
    death_benefit: Optional[float] = Field(default=None, ge=MIN_DEATH_BENEFIT, allow_inf_nan=False)
    target_premium: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    payment_mode: PaymentMode = PaymentMode.MONTHLY

    @field_validator("age", mode="before")
    @classmethod
    def clamp_age(cls, value):
        try:
            age = int(float(value))
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"Age must be a number, got {value!r}")
        return max(AGE_MIN, min(AGE_MAX, age))

    @field_validator("state_code")
    @classmethod
    def check_state(cls, value: str) -> str:
        code = value.strip().upper()
        if code not in STATE_OPTIONS:
            raise ValueError(f"Unknown state code: {value}")
        return code

    @field_validator("term")
    @classmethod
    def check_term(cls, value: int) -> int:
        if value not in TERM_OPTIONS:
            raise ValueError(f"Term must be one of {TERM_OPTIONS}")
        return value

    @field_validator("selected_conditions", "selected_riders")
    @classmethod
    def dedupe(cls, value: list) -> list:
        return list(dict.fromkeys(value))

    @model_validator(mode="after")
    def check_goal_driver(self):
        if self.goal == Goal.TARGET_PREMIUM and self.target_premium is None:
            raise ValueError("target_premium is required when goal is TP")
        if self.goal == Goal.TARGET_DEATH_BENEFIT and self.death_benefit is None:
            raise ValueError("death_benefit is required when goal is DB")
        return self

    @property
    def modal_factor(self) -> float:
        return self.payment_mode.modal_factor


class TierBreakdown(BaseModel):
    """Factor breakdown shown beside a plan tier."""
    mode: PaymentMode
    tier_multiplier: float
    product: float
    age: float
    smoker: float
    conditions: float
    policy_fee: float


class TierOffer(BaseModel):
    """Step 6: One of the Bronze/Silver/Gold offers."""
    name: str
    multiplier: float
    riders: List[RiderId] = Field(default_factory=list)
    death_benefit: float
    billed: float
    annual: float
    display_price: float = Field(description="Billed amount for Monthly mode, annual otherwise")
    underwriting_label: str
    breakdown: TierBreakdown


class PlanRecommendation(BaseModel):
    """Three comparable offers built from one profile."""
    goal: Goal
    payment_mode: PaymentMode
    tiers: List[TierOffer] = Field(default_factory=list)

    def tier(self, name: str) -> Optional[TierOffer]:
        for offer in self.tiers:
            if offer.name.lower() == name.lower():
                return offer
        return None


class PipelineMetrics(BaseModel):
    """Metrics about the pipeline execution."""
    total_duration_seconds: float
    step_durations: Dict[str, float] = Field(default_factory=dict)


class QuoteResult(BaseModel):
    """Complete result from the quoting pipeline."""
    success: bool
    profile: Optional[ClientProfile] = Field(default=None)

    # Resolved pricing inputs
    death_benefit: Optional[float] = Field(default=None)
    policy_fee: Optional[float] = Field(default=None)
    modal_factor: Optional[float] = Field(default=None)
    riders_applied: List[RiderId] = Field(default_factory=list)
    conditions: List[Condition] = Field(default_factory=list)

    # Step results
    annual_base_premium: Optional[float] = Field(default=None)
    premium: Optional[PremiumResult] = Field(default=None)
    recommendation: Optional[PlanRecommendation] = Field(default=None)

    # Execution metadata
    metrics: Optional[PipelineMetrics] = Field(default=None)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class InputExport(BaseModel):
    """Downloadable record of the current client inputs."""
    version: str
    timestamp: datetime
    inputs: ClientProfile
