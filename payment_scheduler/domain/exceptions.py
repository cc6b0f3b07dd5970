"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidBudgetError(DomainException):
    """Budget is negative or not a finite number"""

    pass


class InvalidPaymentItemError(DomainException):
    """Raw payment item is missing data required for scheduling"""

    pass
