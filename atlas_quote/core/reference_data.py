"""
Reference data loader for the condition catalog and company content.
Reads JSON from the data directory, falling back to embedded copies.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from atlas_quote.config import get_settings
from atlas_quote.pipeline.models import Condition, ConditionCategory
from atlas_quote.utils.json_utils import normalize_keys, read_json_file


logger = logging.getLogger(__name__)


_catalog = None
_company = None


class UnknownConditionError(KeyError):
    """Raised when a condition id is not in the catalog."""

    def __init__(self, condition_id: str):
        super().__init__(condition_id)
        self.condition_id = condition_id

    def __str__(self) -> str:
        return f"Unknown condition: {self.condition_id}"


class ConditionCatalog(BaseModel):
    """Condition categories and items, looked up by id."""
    model_config = ConfigDict(frozen=True)

    categories: List[ConditionCategory] = Field(default_factory=list)
    items: List[Condition] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, condition_id: str) -> bool:
        return any(item.id == condition_id for item in self.items)

    def get(self, condition_id: str) -> Condition:
        for item in self.items:
            if item.id == condition_id:
                return item
        raise UnknownConditionError(condition_id)

    def resolve(self, condition_ids: Iterable[str]) -> List[Condition]:
        """Resolve ids in order; raises UnknownConditionError on the first miss."""
        return [self.get(condition_id) for condition_id in condition_ids]

    def by_category(self) -> Dict[str, List[Condition]]:
        """Items grouped by category id, categories in catalog order."""
        grouped: Dict[str, List[Condition]] = {c.id: [] for c in self.categories}
        for item in self.items:
            grouped.setdefault(item.category, []).append(item)
        return grouped


class Brand(BaseModel):
    name: str
    tagline: Optional[str] = None
    logo: Optional[str] = None


class Contact(BaseModel):
    rep_name: Optional[str] = None
    rep_phone: Optional[str] = None
    rep_email: Optional[str] = None


class CompanyProfile(BaseModel):
    """Branding and contact content shown alongside quotes."""
    model_config = ConfigDict(extra="ignore")

    brand: Brand
    contact: Contact = Field(default_factory=Contact)
    about: Optional[str] = None
    differentiators: List[str] = Field(default_factory=list)
    claims_steps: List[str] = Field(default_factory=list)


# Embedded copies used when the data files cannot be read
FALLBACK_CONDITIONS = {
    "categories": [
        {"id": "cardio", "label": "Heart & Circulation"},
        {"id": "metabolic", "label": "Metabolic"},
        {"id": "oncology", "label": "Cancer History"},
        {"id": "respiratory", "label": "Respiratory"},
        {"id": "lifestyle", "label": "Lifestyle"},
    ],
    "items": [
        {"id": "htn_controlled", "label": "High blood pressure (controlled)", "category": "cardio",
         "classDrop": 1, "multiplier": 1.05,
         "tooltip": "Treated with medication, readings in normal range"},
        {"id": "high_cholesterol", "label": "High cholesterol", "category": "cardio",
         "classDrop": 1, "multiplier": 1.03},
        {"id": "heart_attack", "label": "Heart attack / bypass", "category": "cardio",
         "classDrop": 2, "exclude": True, "multiplier": 1.25,
         "tooltip": "Refer to underwriting with cardiology records"},
        {"id": "diabetes_t2", "label": "Type 2 diabetes (oral meds)", "category": "metabolic",
         "classDrop": 2, "multiplier": 1.15},
        {"id": "diabetes_insulin", "label": "Diabetes (insulin)", "category": "metabolic",
         "classDrop": 3, "multiplier": 1.30},
        {"id": "cancer_5yr", "label": "Cancer, treatment ended 5+ years ago", "category": "oncology",
         "classDrop": 1, "multiplier": 1.10},
        {"id": "cancer_recent", "label": "Cancer, treatment within 2 years", "category": "oncology",
         "classDrop": 0, "exclude": True, "multiplier": 1.00,
         "tooltip": "Usually postponed; refer for review"},
        {"id": "asthma_mild", "label": "Asthma (mild)", "category": "respiratory",
         "classDrop": 0, "multiplier": 1.02},
        {"id": "copd", "label": "COPD", "category": "respiratory",
         "classDrop": 2, "exclude": True, "multiplier": 1.40},
        {"id": "dui_5yr", "label": "DUI within 5 years", "category": "lifestyle",
         "classDrop": 2, "multiplier": 1.10},
        {"id": "hazardous_avocation", "label": "Hazardous hobby (scuba, climbing)", "category": "lifestyle",
         "classDrop": 1, "multiplier": 1.05},
    ],
}

FALLBACK_COMPANY = {
    "brand": {
        "name": "Atlas Life",
        "tagline": "Coverage that carries the weight",
        "logo": "assets/atlas-logo.svg",
    },
    "contact": {
        "rep_name": "Your Atlas Representative",
        "rep_phone": "(800) 555-0142",
        "rep_email": "quotes@atlaslife.example",
    },
    "about": "Atlas Life offers term and permanent life insurance with simple, transparent pricing.",
    "differentiators": [
        "Instant quotes across six product lines",
        "Level premiums for the full term",
        "Living benefits through optional riders",
    ],
    "claims_steps": [
        "Call or submit a claim online",
        "Provide the death certificate and policy number",
        "Receive payment, typically within 14 days",
    ],
}


def fallback_condition_catalog() -> ConditionCatalog:
    return ConditionCatalog.model_validate(normalize_keys(FALLBACK_CONDITIONS))


def fallback_company_profile() -> CompanyProfile:
    return CompanyProfile.model_validate(normalize_keys(FALLBACK_COMPANY))


def load_condition_catalog(path: Optional[Path] = None) -> ConditionCatalog:
    """
    Load the condition catalog.
    Falls back to the embedded catalog if the file is missing or invalid.
    """
    path = path or get_settings().conditions_path
    try:
        catalog = ConditionCatalog.model_validate(read_json_file(path))
        logger.info(f"Loaded {len(catalog)} conditions from {path}")
        return catalog
    except (OSError, ValueError) as e:
        logger.warning(f"Condition catalog load failed ({e}). Using embedded fallback.")
        return fallback_condition_catalog()


def load_company_profile(path: Optional[Path] = None) -> CompanyProfile:
    """
    Load company content.
    Falls back to the embedded profile if the file is missing or invalid.
    """
    path = path or get_settings().company_path
    try:
        return CompanyProfile.model_validate(read_json_file(path))
    except (OSError, ValueError) as e:
        logger.warning(f"Company profile load failed ({e}). Using embedded fallback.")
        return fallback_company_profile()


def get_condition_catalog() -> ConditionCatalog:
    """Get the condition catalog singleton, loading it on first use."""
    global _catalog
    if _catalog is None:
        _catalog = load_condition_catalog()
    return _catalog


def get_company_profile() -> CompanyProfile:
    """Get the company profile singleton, loading it on first use."""
    global _company
    if _company is None:
        _company = load_company_profile()
    return _company


def reset_reference_data() -> None:
    """Drop loaded reference data so the next access reloads it."""
    global _catalog, _company
    _catalog = None
    _company = None
