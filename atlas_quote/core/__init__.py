"""
Core services for the quoting system.
"""

from .reference_data import (
    ConditionCatalog,
    CompanyProfile,
    UnknownConditionError,
    get_condition_catalog,
    get_company_profile,
)

__all__ = [
    "ConditionCatalog",
    "CompanyProfile",
    "UnknownConditionError",
    "get_condition_catalog",
    "get_company_profile",
]
