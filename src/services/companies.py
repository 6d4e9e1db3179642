"""Company aggregate service: create, read, update and delete companies."""

from collections.abc import Sequence

import structlog

from src.domain.company import Company, CompanyInput, CompanyPatch, Pricing, PricingInput
from src.repositories.companies import CompanyRepository
from src.services.errors import CompanyNotFoundError, InvariantViolation
from src.services.pricing_rules import (
    BASE_PLAN_REQUIRED_ON_CREATE,
    BASE_PLAN_REQUIRED_ON_UPDATE,
    validate_pricings,
)

logger = structlog.get_logger()


class CompanyService:
    """Manages companies and reconciles their pricing plans."""

    def __init__(self, repository: CompanyRepository):
        self.repository = repository

    async def create(self, data: CompanyInput) -> Company:
        """
        Create a company together with its pricings.

        Args:
            data: Company fields and optional pricing entries

        Returns:
            The persisted company

        Raises:
            InvariantViolation: relative pricings were given without a base plan
        """
        if data.pricings:
            self._check_base_plan(data.pricings, BASE_PLAN_REQUIRED_ON_CREATE)

        company = Company(
            name=data.name,
            country=data.country,
            description=data.description,
            address=data.address,
            phone=data.phone,
            pricings=[self._new_pricing(item) for item in data.pricings or []],
        )
        saved = await self.repository.save_company(company)

        logger.info(
            "company_created",
            company_id=saved.id,
            pricing_count=len(saved.pricings),
        )
        return saved

    async def find_all(self) -> list[Company]:
        return await self.repository.find_all_companies(with_pricings=True)

    async def find_one(self, company_id: int) -> Company:
        return await self._get_company(company_id)

    async def update(self, company_id: int, patch: CompanyPatch) -> Company:
        """
        Apply a partial update to a company.

        Scalar fields present in the patch overwrite the stored values. When
        the patch carries a pricing list, the stored pricings are reconciled
        against it: listed ids are updated in place, entries without an id
        are inserted and everything else is removed.

        Raises:
            CompanyNotFoundError: no company with this id
            InvariantViolation: the new pricing list has relative pricings
                but no base plan
        """
        company = await self._get_company(company_id)

        if patch.touches_pricings:
            if patch.pricings:
                self._check_base_plan(patch.pricings, BASE_PLAN_REQUIRED_ON_UPDATE)
            company.pricings = await self._reconcile_pricings(company, patch.pricings)

        for name, value in patch.changes.items():
            setattr(company, name, value)

        saved = await self.repository.save_company(company)

        logger.info(
            "company_updated",
            company_id=company_id,
            fields=sorted(patch.changes),
            pricings_reconciled=patch.touches_pricings,
            pricing_count=len(saved.pricings),
        )
        return saved

    async def remove(self, company_id: int) -> None:
        """Delete a company and all of its pricings."""
        company = await self._get_company(company_id)
        await self.repository.remove_company(company)
        logger.info("company_removed", company_id=company_id)

    async def _get_company(self, company_id: int) -> Company:
        company = await self.repository.find_company_by_id(company_id, with_pricings=True)
        if company is None:
            logger.warning("company_not_found", company_id=company_id)
            raise CompanyNotFoundError(company_id)
        return company

    def _check_base_plan(self, pricings: Sequence[PricingInput], message: str) -> None:
        try:
            validate_pricings(pricings, message)
        except InvariantViolation:
            logger.warning("base_plan_missing", pricing_count=len(pricings))
            raise

    async def _reconcile_pricings(
        self,
        company: Company,
        incoming: Sequence[PricingInput],
    ) -> list[Pricing]:
        """Diff the stored pricings against the desired list.

        Returns the new collection in the order of ``incoming``. Stored
        pricings not referenced by id are deleted right away. An id that
        does not belong to this company is dropped, not re-created.
        """
        stored_ids = {p.id for p in company.pricings}
        keep_ids = {item.id for item in incoming if item.id is not None and item.id in stored_ids}

        removed = [p for p in company.pricings if p.id not in keep_ids]
        if removed:
            await self.repository.remove_pricings(removed)

        reconciled: list[Pricing] = []
        inserted = dropped = 0
        for item in incoming:
            if item.id is None:
                reconciled.append(self._new_pricing(item, company_id=company.id))
                inserted += 1
                continue

            pricing = await self.repository.find_pricing_by_id_and_company(item.id, company.id)
            if pricing is None:
                logger.warning(
                    "pricing_reference_dropped",
                    company_id=company.id,
                    pricing_id=item.id,
                )
                dropped += 1
                continue

            pricing.name = item.name
            pricing.description = item.description
            pricing.cost = item.cost
            pricing.cost_type = item.cost_type
            pricing.is_base_plan = bool(item.is_base_plan)
            reconciled.append(pricing)

        # A repeated id collapses onto its last entry
        last_seen = {p.id: index for index, p in enumerate(reconciled) if p.id is not None}
        reconciled = [
            p for index, p in enumerate(reconciled) if p.id is None or last_seen[p.id] == index
        ]
        updated = len(last_seen)

        logger.info(
            "pricings_reconciled",
            company_id=company.id,
            removed=len(removed),
            updated=updated,
            inserted=inserted,
            dropped=dropped,
        )
        return reconciled

    def _new_pricing(self, item: PricingInput, company_id: int | None = None) -> Pricing:
        return self.repository.create_pricing(
            name=item.name,
            cost=item.cost,
            cost_type=item.cost_type,
            description=item.description,
            is_base_plan=bool(item.is_base_plan),
            company_id=company_id,
        )
