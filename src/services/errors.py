"""Errors raised by the company services."""


class CompanyServiceError(Exception):
    """Base class for company service errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvariantViolation(CompanyServiceError):
    """The pricing set breaks an aggregate rule (e.g. no base plan)."""


class CompanyNotFoundError(CompanyServiceError):
    """No company exists with the requested id."""

    def __init__(self, company_id: int):
        super().__init__(f"Company with ID {company_id} not found")
        self.company_id = company_id
