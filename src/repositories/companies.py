"""Company aggregate persistence."""

from collections.abc import Sequence
from decimal import Decimal
from typing import Protocol

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domain.company import COMPANY_FIELDS, Company, CostType, Pricing
from src.models.company import CompanyRecord, PricingRecord

logger = structlog.get_logger()


class CompanyRepository(Protocol):
    """Storage operations the company service relies on."""

    async def find_company_by_id(
        self, company_id: int, with_pricings: bool = True
    ) -> Company | None: ...

    async def find_all_companies(self, with_pricings: bool = True) -> list[Company]: ...

    async def save_company(self, company: Company) -> Company: ...

    async def remove_company(self, company: Company) -> None: ...

    async def find_pricing_by_id_and_company(
        self, pricing_id: int, company_id: int
    ) -> Pricing | None: ...

    async def remove_pricings(self, pricings: Sequence[Pricing]) -> None: ...

    def create_pricing(
        self,
        *,
        name: str,
        cost: Decimal,
        cost_type: CostType,
        description: str | None = None,
        is_base_plan: bool = False,
        company_id: int | None = None,
    ) -> Pricing: ...


def pricing_from_record(record: PricingRecord) -> Pricing:
    return Pricing(
        id=record.id,
        name=record.name,
        description=record.description,
        cost=record.cost,
        cost_type=CostType(record.cost_type),
        is_base_plan=record.is_base_plan,
        company_id=record.company_id,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def company_from_record(record: CompanyRecord, with_pricings: bool = True) -> Company:
    return Company(
        id=record.id,
        name=record.name,
        country=record.country,
        description=record.description,
        address=record.address,
        phone=record.phone,
        pricings=[pricing_from_record(p) for p in record.pricings] if with_pricings else [],
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def apply_pricing(record: PricingRecord, pricing: Pricing) -> None:
    """Copy the writable pricing fields onto a row."""
    record.name = pricing.name
    record.description = pricing.description
    record.cost = pricing.cost
    record.cost_type = pricing.cost_type
    record.is_base_plan = pricing.is_base_plan


class SqlAlchemyCompanyRepository:
    """CompanyRepository backed by an async SQLAlchemy session.

    Nothing is committed here; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_company_by_id(
        self, company_id: int, with_pricings: bool = True
    ) -> Company | None:
        record = await self._load_company(company_id, with_pricings)
        if record is None:
            return None
        return company_from_record(record, with_pricings)

    async def find_all_companies(self, with_pricings: bool = True) -> list[Company]:
        stmt = select(CompanyRecord).order_by(CompanyRecord.id)
        if with_pricings:
            stmt = stmt.options(selectinload(CompanyRecord.pricings))
        result = await self.session.execute(stmt)
        return [company_from_record(r, with_pricings) for r in result.scalars().all()]

    async def save_company(self, company: Company) -> Company:
        """
        Insert or update a company and write its pricing collection.

        Pricings with an id are updated in place, pricings without one are
        inserted under this company. Rows missing from the collection are
        left alone; removing them is the caller's job (remove_pricings).
        """
        if company.id is None:
            record = CompanyRecord()
            self.session.add(record)
        else:
            record = await self.session.get(CompanyRecord, company.id)
            if record is None:
                raise LookupError(f"Company {company.id} vanished before save")

        for name in COMPANY_FIELDS:
            setattr(record, name, getattr(company, name))
        await self.session.flush()

        written: list[PricingRecord] = []
        for pricing in company.pricings:
            if pricing.id is None:
                pricing_record = PricingRecord(company_id=record.id)
                self.session.add(pricing_record)
            else:
                pricing_record = await self.session.get(PricingRecord, pricing.id)
                if pricing_record is None or pricing_record.company_id != record.id:
                    logger.warning(
                        "pricing_row_missing_on_save",
                        company_id=record.id,
                        pricing_id=pricing.id,
                    )
                    continue
            apply_pricing(pricing_record, pricing)
            written.append(pricing_record)
        await self.session.flush()

        # Same order as company.pricings
        saved = company_from_record(record, with_pricings=False)
        saved.pricings = [pricing_from_record(r) for r in written]
        return saved

    async def remove_company(self, company: Company) -> None:
        # Children first, without relying on the FK cascade
        await self.session.execute(
            delete(PricingRecord).where(PricingRecord.company_id == company.id)
        )
        await self.session.execute(delete(CompanyRecord).where(CompanyRecord.id == company.id))
        await self.session.flush()

    async def find_pricing_by_id_and_company(
        self, pricing_id: int, company_id: int
    ) -> Pricing | None:
        result = await self.session.execute(
            select(PricingRecord).where(
                PricingRecord.id == pricing_id,
                PricingRecord.company_id == company_id,
            )
        )
        record = result.scalar_one_or_none()
        return pricing_from_record(record) if record else None

    async def remove_pricings(self, pricings: Sequence[Pricing]) -> None:
        ids = [p.id for p in pricings if p.id is not None]
        if not ids:
            return
        await self.session.execute(delete(PricingRecord).where(PricingRecord.id.in_(ids)))
        await self.session.flush()

    def create_pricing(
        self,
        *,
        name: str,
        cost: Decimal,
        cost_type: CostType,
        description: str | None = None,
        is_base_plan: bool = False,
        company_id: int | None = None,
    ) -> Pricing:
        return Pricing(
            name=name,
            cost=cost,
            cost_type=cost_type,
            description=description,
            is_base_plan=is_base_plan,
            company_id=company_id,
        )

    async def _load_company(
        self,
        company_id: int,
        with_pricings: bool,
    ) -> CompanyRecord | None:
        stmt = select(CompanyRecord).where(CompanyRecord.id == company_id)
        if with_pricings:
            stmt = stmt.options(selectinload(CompanyRecord.pricings))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
