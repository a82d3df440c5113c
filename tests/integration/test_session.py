"""Integration tests for session_scope error mapping."""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InvalidRequestError

from roomgen.db.models import Profile
from roomgen.infrastructure.database import StoreUnavailableError, session_scope


class TestSessionScope:
    async def test_commits_on_success(self, session_factory):
        async with session_scope(session_factory) as session:
            session.add(Profile(email="kept@example.com", credits=2))

        async with session_scope(session_factory) as session:
            stored = (await session.execute(select(Profile).where(Profile.email == "kept@example.com"))).scalar_one()
        assert stored.credits == 2

    async def test_unexpected_database_error_becomes_store_unavailable(self, session_factory):
        with pytest.raises(StoreUnavailableError):
            async with session_scope(session_factory):
                raise InvalidRequestError("connection state is invalid")

    async def test_constraint_violation_propagates_unchanged(self, session_factory):
        async with session_scope(session_factory) as session:
            session.add(Profile(email="dup@example.com"))

        with pytest.raises(IntegrityError):
            async with session_scope(session_factory) as session:
                session.add(Profile(email="dup@example.com"))

    async def test_rolls_back_on_error(self, session_factory):
        with pytest.raises(RuntimeError):
            async with session_scope(session_factory) as session:
                session.add(Profile(email="gone@example.com"))
                await session.flush()
                raise RuntimeError("abort")

        async with session_scope(session_factory) as session:
            found = (await session.execute(select(Profile).where(Profile.email == "gone@example.com"))).first()
        assert found is None
