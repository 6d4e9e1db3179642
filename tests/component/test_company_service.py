"""Tests for the company service against an in-memory store."""

from decimal import Decimal

import pytest

from src.domain.company import CompanyInput, CompanyPatch, CostType, PricingInput
from src.services.errors import CompanyNotFoundError, InvariantViolation


def plan(name, cost="10.00", cost_type=CostType.ABSOLUTE, is_base_plan=None, id=None, description=None):
    return PricingInput(
        id=id,
        name=name,
        cost=Decimal(cost),
        cost_type=cost_type,
        is_base_plan=is_base_plan,
        description=description,
    )


@pytest.fixture
def company_with_three_pricings(repository):
    """Company 1 with pricings 1 (base), 2 and 3 (relative)."""
    company_id = repository.add_company(description="Original description", phone="+1-555-0100")
    repository.add_pricing(company_id, "Basic Plan", "99.99", is_base_plan=True)
    repository.add_pricing(company_id, "Pro Plan", "1.5", CostType.RELATIVE)
    repository.add_pricing(company_id, "Enterprise Plan", "2.5", CostType.RELATIVE)
    return company_id


@pytest.mark.asyncio
class TestCreate:
    """Tests for company creation."""

    async def test_creates_company_without_pricings(self, service, repository):
        company = await service.create(CompanyInput(name="Acme", country="US"))

        assert company.id == 1
        assert company.pricings == []
        assert company.created_at is not None
        assert repository.companies[1].name == "Acme"

    async def test_creates_pricings_with_defaults(self, service, repository):
        company = await service.create(
            CompanyInput(name="Acme", country="US", pricings=[plan("Basic")])
        )

        pricing = company.pricings[0]
        assert pricing.id is not None
        assert pricing.company_id == company.id
        assert pricing.description is None
        assert pricing.is_base_plan is False

    async def test_relative_without_base_plan_fails_before_any_write(self, service, repository):
        data = CompanyInput(
            name="Acme",
            country="US",
            pricings=[plan("Pro", "1.5", CostType.RELATIVE, is_base_plan=False)],
        )

        with pytest.raises(InvariantViolation, match="A base plan is required when creating relative pricings"):
            await service.create(data)

        assert "save_company" not in repository.calls
        assert repository.companies == {}

    async def test_relative_with_base_plan_succeeds(self, service):
        company = await service.create(
            CompanyInput(
                name="Acme",
                country="US",
                pricings=[
                    plan("Basic", "99.99", is_base_plan=True),
                    plan("Pro", "1.5", CostType.RELATIVE, is_base_plan=False),
                ],
            )
        )

        assert [p.name for p in company.pricings] == ["Basic", "Pro"]
        assert company.pricings[1].cost_type == CostType.RELATIVE

    async def test_empty_pricing_list_is_valid(self, service):
        company = await service.create(CompanyInput(name="Acme", country="US", pricings=[]))
        assert company.pricings == []


@pytest.mark.asyncio
class TestFind:
    """Tests for read paths."""

    async def test_find_all_includes_pricings(self, service, company_with_three_pricings, repository):
        repository.add_company(name="Other")

        companies = await service.find_all()

        assert [c.name for c in companies] == ["Acme Corp", "Other"]
        assert len(companies[0].pricings) == 3
        assert companies[1].pricings == []

    async def test_find_one(self, service, company_with_three_pricings):
        company = await service.find_one(company_with_three_pricings)
        assert [p.id for p in company.pricings] == [1, 2, 3]

    async def test_find_one_not_found(self, service):
        with pytest.raises(CompanyNotFoundError, match="Company with ID 999 not found"):
            await service.find_one(999)


@pytest.mark.asyncio
class TestUpdate:
    """Tests for partial updates and pricing reconciliation."""

    async def test_not_found_before_anything_else(self, service, repository):
        with pytest.raises(CompanyNotFoundError) as exc_info:
            await service.update(999, CompanyPatch(changes={"name": "X"}))

        assert exc_info.value.company_id == 999
        assert repository.calls == ["find_company_by_id"]

    async def test_not_found_wins_over_invalid_pricings(self, service, repository):
        patch = CompanyPatch(pricings=[plan("Pro", cost_type=CostType.RELATIVE)])

        with pytest.raises(CompanyNotFoundError):
            await service.update(999, patch)

    async def test_partial_update_keeps_other_fields(self, service, company_with_three_pricings):
        company = await service.update(company_with_three_pricings, CompanyPatch(changes={"name": "Y"}))

        assert company.name == "Y"
        assert company.country == "United States"
        assert company.description == "Original description"
        assert company.phone == "+1-555-0100"

    async def test_explicit_null_clears_field(self, service, company_with_three_pricings):
        company = await service.update(company_with_three_pricings, CompanyPatch(changes={"phone": None}))
        assert company.phone is None

    async def test_omitted_pricings_are_untouched(self, service, repository, company_with_three_pricings):
        before = repository.pricings_of(company_with_three_pricings)

        company = await service.update(company_with_three_pricings, CompanyPatch(changes={"name": "Y"}))

        assert [p.id for p in company.pricings] == [1, 2, 3]
        assert [p.name for p in repository.pricings_of(company_with_three_pricings)] == [p.name for p in before]
        assert "remove_pricings" not in repository.calls

    async def test_listed_ids_updated_in_place_unlisted_removed(
        self, service, repository, company_with_three_pricings
    ):
        patch = CompanyPatch(
            pricings=[
                plan("Basic Renamed", "89.99", id=1, is_base_plan=True),
                plan("Pro Plan", "1.75", CostType.RELATIVE, id=2),
            ]
        )

        company = await service.update(company_with_three_pricings, patch)

        assert [p.id for p in company.pricings] == [1, 2]
        assert company.pricings[0].name == "Basic Renamed"
        assert company.pricings[1].cost == Decimal("1.75")
        assert 3 not in repository.pricings
        assert len(repository.pricings_of(company_with_three_pricings)) == 2

    async def test_new_entry_replaces_unlisted(self, service, repository):
        company_id = repository.add_company()
        repository.add_pricing(company_id, "Old")

        company = await service.update(company_id, CompanyPatch(pricings=[plan("New")]))

        assert len(company.pricings) == 1
        assert company.pricings[0].name == "New"
        assert company.pricings[0].id != 1
        assert company.pricings[0].company_id == company_id
        assert 1 not in repository.pricings

    async def test_empty_list_removes_all(self, service, repository, company_with_three_pricings):
        company = await service.update(company_with_three_pricings, CompanyPatch(pricings=[]))

        assert company.pricings == []
        assert repository.pricings_of(company_with_three_pricings) == []

    async def test_update_defaults_omitted_fields(self, service, repository):
        company_id = repository.add_company()
        repository.add_pricing(company_id, "Basic", is_base_plan=True, description="Old text")

        company = await service.update(company_id, CompanyPatch(pricings=[plan("Basic", id=1)]))

        assert company.pricings[0].description is None
        assert company.pricings[0].is_base_plan is False

    async def test_result_follows_incoming_order(self, service, company_with_three_pricings):
        patch = CompanyPatch(
            pricings=[
                plan("Added", "5.00"),
                plan("Enterprise Plan", "2.5", CostType.RELATIVE, id=3),
                plan("Basic Plan", "99.99", id=1, is_base_plan=True),
            ]
        )

        company = await service.update(company_with_three_pricings, patch)

        assert [p.name for p in company.pricings] == ["Added", "Enterprise Plan", "Basic Plan"]

    async def test_repeated_id_keeps_last_entry(self, service, repository, company_with_three_pricings):
        patch = CompanyPatch(
            pricings=[
                plan("First Pass", "10.00", id=1, is_base_plan=True),
                plan("Added", "5.00"),
                plan("Second Pass", "20.00", id=1, is_base_plan=True),
            ]
        )

        company = await service.update(company_with_three_pricings, patch)

        assert [p.name for p in company.pricings] == ["Added", "Second Pass"]
        assert repository.pricings[1].name == "Second Pass"
        assert repository.pricings[1].cost == Decimal("20.00")
        reread = await service.find_one(company_with_three_pricings)
        assert sorted(p.name for p in reread.pricings) == sorted(p.name for p in company.pricings)

    async def test_unknown_id_is_dropped(self, service, repository, company_with_three_pricings):
        patch = CompanyPatch(pricings=[plan("Basic Plan", id=1), plan("Ghost", id=42)])

        company = await service.update(company_with_three_pricings, patch)

        assert [p.id for p in company.pricings] == [1]
        assert all(p.name != "Ghost" for p in repository.pricings.values())

    async def test_other_companys_pricing_is_not_matched(self, service, repository):
        first = repository.add_company(name="First")
        second = repository.add_company(name="Second")
        foreign_id = repository.add_pricing(second, "Theirs", "10.00")

        company = await service.update(first, CompanyPatch(pricings=[plan("Hijack", "1.00", id=foreign_id)]))

        assert company.pricings == []
        assert repository.pricings[foreign_id].name == "Theirs"
        assert repository.pricings[foreign_id].company_id == second

    async def test_invariant_violation_leaves_store_untouched(
        self, service, repository, company_with_three_pricings
    ):
        patch = CompanyPatch(
            changes={"name": "Should not stick"},
            pricings=[plan("Pro Plan", "1.5", CostType.RELATIVE, id=2, is_base_plan=False)],
        )

        with pytest.raises(InvariantViolation, match="A base plan is required when updating with relative pricings"):
            await service.update(company_with_three_pricings, patch)

        assert "save_company" not in repository.calls
        assert "remove_pricings" not in repository.calls
        assert repository.companies[company_with_three_pricings].name == "Acme Corp"
        assert len(repository.pricings_of(company_with_three_pricings)) == 3

    async def test_only_incoming_list_is_validated(self, service, repository):
        company_id = repository.add_company()
        repository.add_pricing(company_id, "Basic", is_base_plan=True)

        # The stored base plan does not count; only the new list does
        with pytest.raises(InvariantViolation):
            await service.update(company_id, CompanyPatch(pricings=[plan("Pro", cost_type=CostType.RELATIVE)]))


@pytest.mark.asyncio
class TestRemove:
    """Tests for company deletion."""

    async def test_not_found(self, service, repository):
        with pytest.raises(CompanyNotFoundError):
            await service.remove(999)

        assert "remove_company" not in repository.calls

    async def test_removes_company_and_pricings(self, service, repository, company_with_three_pricings):
        await service.remove(company_with_three_pricings)

        assert repository.companies == {}
        assert repository.pricings == {}
