"""API request/response schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.domain.company import (
    COMPANY_FIELDS,
    Company,
    CompanyInput,
    CompanyPatch,
    CostType,
    Pricing,
    PricingInput,
)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === Pricing Schemas ===

class CreatePricingRequest(CamelModel):
    """A pricing plan submitted with a company."""
    name: str = Field(..., min_length=1, max_length=255, examples=["Basic Plan"])
    description: Optional[str] = Field(None, examples=["Perfect for small teams"])
    cost: Decimal = Field(
        ...,
        max_digits=10,
        decimal_places=2,
        description="Fixed amount for absolute pricings, multiplier of the base plan for relative ones",
        examples=[99.99],
    )
    cost_type: CostType = Field(..., examples=[CostType.ABSOLUTE])
    is_base_plan: Optional[bool] = Field(None, description="Reference plan for relative costs")

    def to_input(self) -> PricingInput:
        return PricingInput(
            name=self.name,
            description=self.description,
            cost=self.cost,
            cost_type=self.cost_type,
            is_base_plan=self.is_base_plan,
        )


class UpdatePricingRequest(CreatePricingRequest):
    """A desired pricing plan; with an id it updates that plan in place."""
    id: Optional[int] = Field(None, ge=0, description="Existing pricing to update")

    def to_input(self) -> PricingInput:
        pricing = super().to_input()
        pricing.id = self.id
        return pricing


class PricingResponse(CamelModel):
    """Pricing plan view."""
    id: int
    name: str
    description: Optional[str]
    cost: float
    cost_type: CostType
    is_base_plan: bool
    company_id: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, pricing: Pricing) -> "PricingResponse":
        return cls(
            id=pricing.id,
            name=pricing.name,
            description=pricing.description,
            cost=float(pricing.cost),
            cost_type=pricing.cost_type,
            is_base_plan=pricing.is_base_plan,
            company_id=pricing.company_id,
            created_at=pricing.created_at,
            updated_at=pricing.updated_at,
        )


# === Company Schemas ===

class CreateCompanyRequest(CamelModel):
    """Request to create a company."""
    name: str = Field(..., min_length=1, max_length=255, examples=["Acme Corp"])
    country: str = Field(..., min_length=1, max_length=255, examples=["United States"])
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)
    pricings: Optional[List[CreatePricingRequest]] = None

    def to_input(self) -> CompanyInput:
        return CompanyInput(
            name=self.name,
            country=self.country,
            description=self.description,
            address=self.address,
            phone=self.phone,
            pricings=[p.to_input() for p in self.pricings] if self.pricings is not None else None,
        )


class UpdateCompanyRequest(CamelModel):
    """Partial company update.

    Only the fields sent are applied. Sending ``pricings`` replaces the
    whole pricing set; leaving it out keeps the stored pricings.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    country: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=50)
    pricings: Optional[List[UpdatePricingRequest]] = None

    @field_validator("name", "country")
    @classmethod
    def _not_null(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            raise ValueError("must not be null")
        return value

    def to_patch(self) -> CompanyPatch:
        sent = self.model_fields_set
        changes = {name: getattr(self, name) for name in COMPANY_FIELDS if name in sent}
        pricings = None
        if "pricings" in sent and self.pricings is not None:
            pricings = [p.to_input() for p in self.pricings]
        return CompanyPatch(changes=changes, pricings=pricings)


class CompanyResponse(CamelModel):
    """Company view including its pricing plans."""
    id: int
    name: str
    country: str
    description: Optional[str]
    address: Optional[str]
    phone: Optional[str]
    pricings: List[PricingResponse] = []
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, company: Company) -> "CompanyResponse":
        return cls(
            id=company.id,
            name=company.name,
            country=company.country,
            description=company.description,
            address=company.address,
            phone=company.phone,
            pricings=[PricingResponse.from_domain(p) for p in company.pricings],
            created_at=company.created_at,
            updated_at=company.updated_at,
        )


class ErrorResponse(BaseModel):
    """Error body for 400/404 responses."""
    detail: str
