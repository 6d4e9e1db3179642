"""Persistence collaborators."""

from src.repositories.companies import CompanyRepository, SqlAlchemyCompanyRepository

__all__ = ["CompanyRepository", "SqlAlchemyCompanyRepository"]
