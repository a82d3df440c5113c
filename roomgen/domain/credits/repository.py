"""Repository protocol for credit ledger operations."""

from __future__ import annotations

from typing import Protocol, Sequence

from roomgen.db.models import CreditTransaction as CreditTransactionModel, Profile as ProfileModel


class CreditRepository(Protocol):
    async def get_profile(self, user_id: str) -> ProfileModel | None:
        ...

    async def create_profile(self, *, email: str | None, credits: int, is_pro: bool) -> ProfileModel:
        ...

    async def decrement_if_available(self, user_id: str, amount: int) -> int | None:
        ...

    async def increment(self, user_id: str, amount: int) -> int | None:
        ...

    async def add_transaction(
        self,
        *,
        user_id: str,
        job_id: str | None,
        amount: int,
        type: str,
        description: str | None,
    ) -> CreditTransactionModel:
        ...

    async def find_transaction(self, job_id: str, type: str) -> CreditTransactionModel | None:
        ...

    async def list_transactions(self, user_id: str, limit: int, offset: int) -> Sequence[CreditTransactionModel]:
        ...
