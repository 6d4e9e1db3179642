"""Company API endpoints."""

from typing import Annotated, List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from src.api.dependencies import get_company_service
from src.api.schemas import (
    CompanyResponse,
    CreateCompanyRequest,
    ErrorResponse,
    UpdateCompanyRequest,
)
from src.services.companies import CompanyService
from src.services.errors import CompanyNotFoundError, InvariantViolation

logger = structlog.get_logger()
router = APIRouter()

CompanyId = Annotated[int, Path(ge=0, description="Company ID")]


@router.post(
    "/companies",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_company(
    request: CreateCompanyRequest,
    service: CompanyService = Depends(get_company_service),
):
    """
    Create a company with optional pricing plans.

    Relative pricings require at least one plan marked as base plan.
    """
    try:
        company = await service.create(request.to_input())
    except InvariantViolation as e:
        raise HTTPException(status_code=400, detail=e.message)

    return CompanyResponse.from_domain(company)


@router.get("/companies", response_model=List[CompanyResponse])
async def list_companies(service: CompanyService = Depends(get_company_service)):
    """List all companies with their pricing plans."""
    companies = await service.find_all()
    return [CompanyResponse.from_domain(c) for c in companies]


@router.get(
    "/companies/{company_id}",
    response_model=CompanyResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_company(
    company_id: CompanyId,
    service: CompanyService = Depends(get_company_service),
):
    """Get a company with its pricing plans."""
    try:
        company = await service.find_one(company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return CompanyResponse.from_domain(company)


@router.patch(
    "/companies/{company_id}",
    response_model=CompanyResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_company(
    request: UpdateCompanyRequest,
    company_id: CompanyId,
    service: CompanyService = Depends(get_company_service),
):
    """
    Partially update a company.

    When ``pricings`` is sent it is the full desired list: entries with an
    id update that plan, entries without one are added, and stored plans
    that are not listed are deleted.
    """
    try:
        company = await service.update(company_id, request.to_patch())
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvariantViolation as e:
        raise HTTPException(status_code=400, detail=e.message)

    return CompanyResponse.from_domain(company)


@router.delete(
    "/companies/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_company(
    company_id: CompanyId,
    service: CompanyService = Depends(get_company_service),
):
    """Delete a company and all its pricing plans."""
    try:
        await service.remove(company_id)
    except CompanyNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
