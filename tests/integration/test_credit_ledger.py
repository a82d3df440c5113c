"""Integration tests for roomgen.domain.credits.CreditLedger against sqlite."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from roomgen.domain.credits import CreditLedger, InsufficientCreditError, UserNotFoundError
from roomgen.infrastructure.database.repositories import SqlCreditRepository


class TestDebit:
    async def test_debit_decrements_and_records_transaction(self, ledger: CreditLedger, job_store):
        account = await ledger.open_account(email="a@example.com", credits=2)
        job = await job_store.create(
            user_id=account.user_id, image_url="https://img.test/a.jpg", style="modern", room_type="bedroom", prompt="p"
        )

        remaining = await ledger.debit(account.user_id, job_id=job.id)

        assert remaining == 1
        assert await ledger.get_balance(account.user_id) == 1
        types = sorted(tx.type for tx in await ledger.list_transactions(account.user_id))
        assert types == ["debit", "grant"]

    async def test_debit_at_zero_is_rejected(self, ledger: CreditLedger):
        account = await ledger.open_account(credits=0)
        with pytest.raises(InsufficientCreditError):
            await ledger.debit(account.user_id)
        assert await ledger.get_balance(account.user_id) == 0

    async def test_debit_unknown_user(self, ledger: CreditLedger):
        with pytest.raises(UserNotFoundError):
            await ledger.debit("no-such-user")

    async def test_concurrent_debits_never_overdraw(self, ledger: CreditLedger):
        account = await ledger.open_account(credits=3)

        results = await asyncio.gather(
            *(ledger.debit(account.user_id) for _ in range(8)),
            return_exceptions=True,
        )

        successes = [r for r in results if isinstance(r, int)]
        rejections = [r for r in results if isinstance(r, InsufficientCreditError)]
        assert len(successes) == 3
        assert len(rejections) == 5
        assert sorted(successes) == [0, 1, 2]
        assert await ledger.get_balance(account.user_id) == 0


class TestCredit:
    async def test_refund_restores_balance(self, ledger: CreditLedger, job_store):
        account = await ledger.open_account(credits=1)
        job = await job_store.create(
            user_id=account.user_id, image_url="https://img.test/a.jpg", style="modern", room_type="bedroom", prompt="p"
        )
        await ledger.debit(account.user_id, job_id=job.id)

        balance = await ledger.credit(account.user_id, job_id=job.id)

        assert balance == 1

    async def test_refund_is_idempotent_per_job(self, ledger: CreditLedger, job_store):
        account = await ledger.open_account(credits=1)
        job = await job_store.create(
            user_id=account.user_id, image_url="https://img.test/a.jpg", style="modern", room_type="bedroom", prompt="p"
        )
        await ledger.debit(account.user_id, job_id=job.id)

        await ledger.credit(account.user_id, job_id=job.id)
        balance = await ledger.credit(account.user_id, job_id=job.id)

        assert balance == 1
        refunds = [tx for tx in await ledger.list_transactions(account.user_id) if tx.type == "refund"]
        assert len(refunds) == 1

    async def test_other_constraint_failures_are_not_mistaken_for_a_repeat(self, ledger: CreditLedger, session_factory):
        account = await ledger.open_account(credits=0)

        class RejectingRepository(SqlCreditRepository):
            async def add_transaction(self, **fields):
                raise IntegrityError("INSERT INTO credit_transactions", fields, Exception("FOREIGN KEY constraint failed"))

        rejecting = CreditLedger(session_factory, repository_factory=RejectingRepository)

        with pytest.raises(IntegrityError):
            await rejecting.credit(account.user_id, job_id="job-without-row")
        assert await ledger.get_balance(account.user_id) == 0

    async def test_credit_unknown_user(self, ledger: CreditLedger):
        with pytest.raises(UserNotFoundError):
            await ledger.credit("no-such-user")

    async def test_credit_amount(self, ledger: CreditLedger):
        account = await ledger.open_account(credits=0)
        assert await ledger.credit(account.user_id, 3) == 3


class TestAccounts:
    async def test_open_account_rejects_negative_grant(self, ledger: CreditLedger):
        with pytest.raises(ValueError):
            await ledger.open_account(credits=-1)

    async def test_get_account(self, ledger: CreditLedger):
        account = await ledger.open_account(email="pro@example.com", credits=5, is_pro=True)
        fetched = await ledger.get_account(account.user_id)
        assert fetched.email == "pro@example.com"
        assert fetched.credits == 5
        assert fetched.is_pro is True

    async def test_get_account_unknown(self, ledger: CreditLedger):
        with pytest.raises(UserNotFoundError):
            await ledger.get_account("missing")
