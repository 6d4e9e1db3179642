"""Aggregate rules over a company's pricing set."""

from collections.abc import Iterable
from typing import Protocol

from src.domain.company import CostType
from src.services.errors import InvariantViolation

BASE_PLAN_REQUIRED_ON_CREATE = "A base plan is required when creating relative pricings"
BASE_PLAN_REQUIRED_ON_UPDATE = "A base plan is required when updating with relative pricings"


class PricingLike(Protocol):
    cost_type: CostType
    is_base_plan: bool | None


def is_missing_base_plan(pricings: Iterable[PricingLike] | None) -> bool:
    """Return True if the set has a relative pricing but no base plan.

    Only the given set is inspected; an empty or omitted set never violates.
    """
    has_relative = False
    has_base_plan = False
    for pricing in pricings or ():
        if pricing.cost_type == CostType.RELATIVE:
            has_relative = True
        if pricing.is_base_plan is True:
            has_base_plan = True
    return has_relative and not has_base_plan


def validate_pricings(
    pricings: Iterable[PricingLike] | None,
    message: str = BASE_PLAN_REQUIRED_ON_CREATE,
) -> None:
    """
    Enforce the base-plan rule on a pricing set.

    Args:
        pricings: Pricing entries to check (None is treated as empty)
        message: Error message for the calling context (creating/updating)

    Raises:
        InvariantViolation: if a relative pricing exists without a base plan
    """
    if is_missing_base_plan(pricings):
        raise InvariantViolation(message)
