#!/usr/bin/env python3
"""Load demo companies and pricing plans."""

import argparse
import asyncio
import sys
from decimal import Decimal

sys.path.insert(0, ".")

import structlog
from sqlalchemy import func, select, text

from src.database import dispose_engine, get_session_context
from src.domain.company import CompanyInput, CostType, PricingInput
from src.log_config import configure_logging
from src.models import CompanyRecord, PricingRecord
from src.repositories.companies import SqlAlchemyCompanyRepository
from src.services.companies import CompanyService

logger = structlog.get_logger()

A = CostType.ABSOLUTE
R = CostType.RELATIVE

# (name, country, description, address, phone, [(plan, description, cost, type, base)])
SEED_COMPANIES = [
    (
        "Acme Corporation", "United States", "Leading software company",
        "123 Tech Street, San Francisco, CA", "+1-555-0100",
        [
            ("Basic Plan", "Perfect for small teams", "99.99", A, True),
            ("Pro Plan", "For growing businesses", "1.5", R, False),
            ("Enterprise Plan", "Full-scale solution for large organizations", "2.5", R, False),
        ],
    ),
    (
        "Global Solutions Ltd", "United Kingdom", "International consulting firm",
        "456 Business Ave, London", "+44-20-5555-0100",
        [
            ("Starter", "Entry level package", "149.99", A, True),
            ("Professional", "Advanced features", "1.8", R, False),
            ("Enterprise", "Full featured solution", "2.0", R, False),
            ("Ultimate", "Complete enterprise solution", "3.0", R, False),
        ],
    ),
    (
        "Tech Innovations Inc", "Canada", "Cutting-edge technology provider",
        "789 Innovation Drive, Toronto, ON", "+1-416-555-0200",
        [
            ("Standard", "Essential features", "79.99", A, True),
            ("Premium", "Advanced features", "149.99", A, False),
            ("Enterprise", "Full enterprise solution", "299.99", A, False),
        ],
    ),
    (
        "Digital Dynamics", "Germany", "Digital transformation specialists",
        "321 Digital Way, Berlin", "+49-30-5555-0300",
        [
            ("Foundation", "Core services package", "199.99", A, True),
            ("Advanced", "Extended capabilities", "349.99", A, False),
            ("Enterprise Plus", "Maximum performance package", "549.99", A, False),
        ],
    ),
    (
        "Cloud Services Co", "Australia", "Cloud infrastructure experts",
        "654 Cloud Boulevard, Sydney", "+61-2-5555-0400",
        [
            ("Essentials", "Basic cloud services", "129.99", A, True),
            ("Business", "Complete business solution", "1.75", R, False),
            ("Enterprise", "Large scale deployment", "2.25", R, False),
        ],
    ),
    (
        "Future Systems", "Japan", "Next-generation software solutions",
        "987 Future Plaza, Tokyo", "+81-3-5555-0500",
        [
            ("Basic", "Starter package", "89.99", A, True),
            ("Professional", "Professional tier", "179.99", A, False),
            ("Enterprise", "Enterprise level solution", "349.99", A, False),
        ],
    ),
]


def build_inputs() -> list[CompanyInput]:
    """Turn the seed table into service inputs."""
    return [
        CompanyInput(
            name=name,
            country=country,
            description=description,
            address=address,
            phone=phone,
            pricings=[
                PricingInput(
                    name=plan,
                    description=plan_description,
                    cost=Decimal(cost),
                    cost_type=cost_type,
                    is_base_plan=is_base,
                )
                for plan, plan_description, cost, cost_type, is_base in plans
            ],
        )
        for name, country, description, address, phone, plans in SEED_COMPANIES
    ]


async def seed(truncate: bool = True) -> dict:
    """Insert the demo companies through the company service."""
    async with get_session_context() as session:
        if truncate:
            await session.execute(text("TRUNCATE TABLE pricings, companies RESTART IDENTITY CASCADE"))
            logger.info("tables_truncated")

        service = CompanyService(SqlAlchemyCompanyRepository(session))
        for company in build_inputs():
            await service.create(company)

        companies = await session.scalar(select(func.count()).select_from(CompanyRecord))
        pricings = await session.scalar(select(func.count()).select_from(PricingRecord))

    await dispose_engine()
    return {"companies": companies, "pricings": pricings}


def main():
    parser = argparse.ArgumentParser(description="Seed demo companies and pricings")
    parser.add_argument(
        "--keep-existing",
        action="store_true",
        help="Append instead of truncating the tables first",
    )
    args = parser.parse_args()

    configure_logging()
    counts = asyncio.run(seed(truncate=not args.keep_existing))

    print("\n✅ Database seeded successfully!\n")
    print(f"Companies:  {counts['companies']}")
    print(f"Pricings:   {counts['pricings']}\n")


if __name__ == "__main__":
    main()
