"""Company aggregate value types.

A Company owns its Pricing entries exclusively. These are plain
dataclasses: they carry no persistence behaviour, the repository maps
them to and from table rows.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any


class CostType(StrEnum):
    """How a pricing cost is interpreted."""

    ABSOLUTE = "absolute"  # fixed currency amount
    RELATIVE = "relative"  # multiplier of the base plan cost


# Scalar company fields a patch may overwrite
COMPANY_FIELDS = ("name", "country", "description", "address", "phone")


@dataclass
class Pricing:
    """A pricing plan, persisted or not yet persisted (id is None)."""

    name: str
    cost: Decimal
    cost_type: CostType
    company_id: int | None = None
    description: str | None = None
    is_base_plan: bool = False
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Company:
    """A company together with its pricing collection."""

    name: str
    country: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    pricings: list[Pricing] = field(default_factory=list)
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class PricingInput:
    """A desired pricing entry as supplied by a caller.

    ``id`` set means "update that pricing in place", unset means "insert".
    ``is_base_plan`` stays None when the caller omitted it.
    """

    name: str
    cost: Decimal
    cost_type: CostType
    description: str | None = None
    is_base_plan: bool | None = None
    id: int | None = None


@dataclass
class CompanyInput:
    """Fields for creating a company."""

    name: str
    country: str
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    pricings: list[PricingInput] | None = None


@dataclass
class CompanyPatch:
    """A partial company update.

    ``changes`` only holds the scalar fields present in the request.
    ``pricings`` is None when the request did not mention pricings at all;
    an empty list is an explicit request to remove every pricing.
    """

    changes: dict[str, Any] = field(default_factory=dict)
    pricings: list[PricingInput] | None = None

    def __post_init__(self) -> None:
        unknown = set(self.changes) - set(COMPANY_FIELDS)
        if unknown:
            raise ValueError(f"Unknown company fields: {', '.join(sorted(unknown))}")

    @property
    def touches_pricings(self) -> bool:
        return self.pricings is not None
