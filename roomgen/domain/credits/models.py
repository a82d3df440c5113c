"""Domain models for credit ledger operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class CreditAccount:
    user_id: str
    email: Optional[str]
    credits: int
    is_pro: bool
    created_at: Optional[datetime]


@dataclass(slots=True)
class CreditTransactionRecord:
    id: str
    user_id: str
    job_id: Optional[str]
    amount: int
    type: str
    description: Optional[str]
    created_at: datetime
