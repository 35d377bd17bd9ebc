"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidLoanTermsError(DomainException):
    """Loan dates or payment figures cannot be used for a calculation"""

    pass


class InvalidCoverRequestError(DomainException):
    """Family composition cannot be covered under a funeral policy"""

    pass


class RateNotFoundError(DomainException):
    """No rate exists for the benefit option and age"""

    pass
