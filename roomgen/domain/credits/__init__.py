"""Credit ledger domain exports"""

from .exceptions import CreditError, InsufficientCreditError, UserNotFoundError
from .models import CreditAccount, CreditTransactionRecord
from .service import CreditLedger

__all__ = [
    "CreditAccount",
    "CreditError",
    "CreditLedger",
    "CreditTransactionRecord",
    "InsufficientCreditError",
    "UserNotFoundError",
]
