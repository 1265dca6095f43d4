"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidLoanParametersError(DomainException):
    """Loan parameters violate the loan contract (e.g. active loan without rates)"""

    pass


class TaxDataError(DomainException):
    """Municipality tax data is malformed or empty"""

    pass


class TaxDataFetchError(DomainException):
    """Skatteverket API returned an error or is unavailable"""

    pass
