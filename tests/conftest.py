"""
Pytest configuration and fixtures.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from atlas_quote.core.reference_data import fallback_condition_catalog
from atlas_quote.pipeline.models import (
    ClientProfile,
    Condition,
    PricingInputs,
    PolicyType,
    Sex,
    SmokerStatus,
)


@pytest.fixture
def catalog():
    """Embedded condition catalog."""
    return fallback_condition_catalog()


@pytest.fixture
def term_inputs():
    """40-year-old male non-smoker, 20-year term, $500K, $6/mo fee, monthly billing."""
    return PricingInputs(
        death_benefit=500_000,
        age=40,
        sex=Sex.MALE,
        policy_type=PolicyType.TERM,
        smoker=SmokerStatus.NON_SMOKER,
        term=20,
        conditions=[],
        riders=[],
        policy_fee=6.0,
        modal_factor=0.09,
    )


@pytest.fixture
def term_profile():
    """Client profile matching term_inputs, quoted in Michigan."""
    return ClientProfile(
        age=40,
        sex="M",
        smoker="N",
        policy_type="Term",
        term=20,
        state_code="MI",
        goal="DB",
        death_benefit=500_000,
        payment_mode="Monthly",
    )


@pytest.fixture
def make_condition():
    """Factory for ad hoc conditions."""
    def _make(class_drop=0, exclude=False, multiplier=1.0, id="test"):
        return Condition(
            id=id,
            label=id.replace("_", " ").title(),
            category="test",
            class_drop=class_drop,
            exclude=exclude,
            multiplier=multiplier,
        )
    return _make
