"""Database models."""

from src.models.base import Base
from src.models.company import CompanyRecord, PricingRecord

__all__ = [
    "Base",
    "CompanyRecord",
    "PricingRecord",
]
