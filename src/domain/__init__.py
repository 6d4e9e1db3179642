"""Plain value types shared by the service and the repository."""

from src.domain.company import (
    Company,
    CompanyInput,
    CompanyPatch,
    CostType,
    Pricing,
    PricingInput,
)

__all__ = [
    "Company",
    "CompanyInput",
    "CompanyPatch",
    "CostType",
    "Pricing",
    "PricingInput",
]
