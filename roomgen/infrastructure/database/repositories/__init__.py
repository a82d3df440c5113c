"""SQLAlchemy-backed repository implementations."""

from .credit_repository import SqlCreditRepository
from .generation_repository import SqlGenerationRepository

__all__ = [
    "SqlCreditRepository",
    "SqlGenerationRepository",
]
