"""Credit ledger domain service"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from roomgen.db.models import CreditTransaction as CreditTransactionModel, Profile as ProfileModel
from roomgen.infrastructure.database import session_scope
from roomgen.infrastructure.database.repositories.credit_repository import SqlCreditRepository

from .exceptions import InsufficientCreditError, UserNotFoundError
from .models import CreditAccount, CreditTransactionRecord
from .repository import CreditRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreditLedger:
    """Owns every write to a user's spendable credit balance.

    Each operation runs in its own unit of work and is committed before it
    returns. Debits and refunds are recorded in ``credit_transactions`` keyed
    by job id, so a job can be debited once and refunded at most once.
    """

    session_factory: async_sessionmaker[AsyncSession]
    repository_factory: Callable[[AsyncSession], CreditRepository] = SqlCreditRepository

    async def open_account(
        self,
        *,
        email: Optional[str] = None,
        credits: int = 0,
        is_pro: bool = False,
    ) -> CreditAccount:
        if credits < 0:
            raise ValueError("initial credits must not be negative")
        async with session_scope(self.session_factory) as session:
            repository = self.repository_factory(session)
            profile = await repository.create_profile(email=email, credits=credits, is_pro=is_pro)
            if credits:
                await repository.add_transaction(
                    user_id=profile.id,
                    job_id=None,
                    amount=credits,
                    type="grant",
                    description="Initial credit grant",
                )
        logger.info("Opened credit account %s with %d credits", profile.id, credits)
        return self._to_account(profile)

    async def get_account(self, user_id: str) -> CreditAccount:
        async with session_scope(self.session_factory) as session:
            profile = await self.repository_factory(session).get_profile(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return self._to_account(profile)

    async def get_balance(self, user_id: str) -> int:
        account = await self.get_account(user_id)
        return account.credits

    async def debit(self, user_id: str, *, job_id: Optional[str] = None, amount: int = 1) -> int:
        """Atomically take ``amount`` credits; returns the remaining balance."""
        async with session_scope(self.session_factory) as session:
            repository = self.repository_factory(session)
            remaining = await repository.decrement_if_available(user_id, amount)
            if remaining is None:
                if await repository.get_profile(user_id) is None:
                    raise UserNotFoundError(user_id)
                raise InsufficientCreditError(user_id)
            await repository.add_transaction(
                user_id=user_id,
                job_id=job_id,
                amount=-amount,
                type="debit",
                description="Room generation",
            )
        logger.info("Debited %d credit(s) from %s for job %s, %d left", amount, user_id, job_id, remaining)
        return remaining

    async def credit(
        self,
        user_id: str,
        amount: int = 1,
        *,
        job_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Compensating credit. Repeating it for the same job is a no-op."""
        try:
            async with session_scope(self.session_factory) as session:
                repository = self.repository_factory(session)
                balance = await repository.increment(user_id, amount)
                if balance is None:
                    raise UserNotFoundError(user_id)
                await repository.add_transaction(
                    user_id=user_id,
                    job_id=job_id,
                    amount=amount,
                    type="refund",
                    description=description or "Generation refund",
                )
        except IntegrityError:
            if job_id is None or not await self._has_refund(job_id):
                raise
            logger.info("Refund for job %s already recorded, skipping", job_id)
            return await self.get_balance(user_id)
        logger.info("Refunded %d credit(s) to %s for job %s, balance %d", amount, user_id, job_id, balance)
        return balance

    async def list_transactions(self, user_id: str, limit: int = 20, offset: int = 0) -> list[CreditTransactionRecord]:
        async with session_scope(self.session_factory) as session:
            rows = await self.repository_factory(session).list_transactions(user_id, limit, offset)
        return [self._to_transaction(row) for row in rows]

    async def _has_refund(self, job_id: str) -> bool:
        async with session_scope(self.session_factory) as session:
            existing = await self.repository_factory(session).find_transaction(job_id, "refund")
        return existing is not None

    @staticmethod
    def _to_account(model: ProfileModel) -> CreditAccount:
        return CreditAccount(
            user_id=model.id,
            email=model.email,
            credits=model.credits,
            is_pro=bool(model.is_pro),
            created_at=model.created_at,
        )

    @staticmethod
    def _to_transaction(model: CreditTransactionModel) -> CreditTransactionRecord:
        return CreditTransactionRecord(
            id=model.id,
            user_id=model.user_id,
            job_id=model.job_id,
            amount=model.amount,
            type=model.type,
            description=model.description,
            created_at=model.created_at,
        )
