"""Credit ledger specific exceptions."""


class CreditError(Exception):
    """Base class for credit ledger errors."""


class InsufficientCreditError(CreditError):
    """Raised when a debit would take the balance below zero."""


class UserNotFoundError(CreditError):
    """Raised when no profile exists for the requested user id."""
