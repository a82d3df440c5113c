"""SQLAlchemy implementation for the credit ledger"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select, update

from roomgen.db.models import CreditTransaction, Profile
from roomgen.domain.common import AsyncRepository


class SqlCreditRepository(AsyncRepository[Profile]):
    model = Profile

    async def get_profile(self, user_id: str) -> Profile | None:
        return await self.get(user_id)

    async def create_profile(self, *, email: str | None, credits: int, is_pro: bool) -> Profile:
        return await self.add(Profile(email=email, credits=credits, is_pro=is_pro))

    async def decrement_if_available(self, user_id: str, amount: int) -> int | None:
        """Check-and-decrement in one statement; ``None`` when no row qualified."""
        stmt = (
            update(Profile)
            .where(Profile.id == user_id, Profile.credits >= amount)
            .values(credits=Profile.credits - amount)
            .execution_options(synchronize_session=False)
            .returning(Profile.credits)
        )
        return await self.scalar(stmt)

    async def increment(self, user_id: str, amount: int) -> int | None:
        stmt = (
            update(Profile)
            .where(Profile.id == user_id)
            .values(credits=Profile.credits + amount)
            .execution_options(synchronize_session=False)
            .returning(Profile.credits)
        )
        return await self.scalar(stmt)

    async def add_transaction(
        self,
        *,
        user_id: str,
        job_id: str | None,
        amount: int,
        type: str,
        description: str | None,
    ) -> CreditTransaction:
        tx = CreditTransaction(
            user_id=user_id,
            job_id=job_id,
            amount=amount,
            type=type,
            description=description,
        )
        return await self.add(tx)

    async def find_transaction(self, job_id: str, type: str) -> CreditTransaction | None:
        stmt = select(CreditTransaction).where(CreditTransaction.job_id == job_id, CreditTransaction.type == type)
        return await self.first(stmt)

    async def list_transactions(self, user_id: str, limit: int, offset: int) -> Sequence[CreditTransaction]:
        stmt = (
            select(CreditTransaction)
            .where(CreditTransaction.user_id == user_id)
            .order_by(desc(CreditTransaction.created_at))
            .offset(offset)
            .limit(limit)
        )
        return await self.all(stmt)
