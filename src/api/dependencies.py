"""FastAPI dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_session
from src.repositories.companies import SqlAlchemyCompanyRepository
from src.services.companies import CompanyService


async def get_company_service(
    session: AsyncSession = Depends(get_session),
) -> CompanyService:
    """Company service bound to the request's session."""
    return CompanyService(SqlAlchemyCompanyRepository(session))
