"""Base class shared by the SQL repositories."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

ModelT = TypeVar("ModelT")


class AsyncRepository(Generic[ModelT]):
    """Runs statements on a caller-owned session; never commits.

    Subclasses set ``model`` to the ORM class they primarily persist so
    ``get`` can load by primary key.
    """

    model: ClassVar[type]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, ident: Any) -> ModelT | None:
        return await self.session.get(self.model, ident)

    async def add(self, instance: ModelT) -> ModelT:
        """Insert and reload so server defaults (timestamps) are populated."""
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def first(self, stmt: Executable) -> Any:
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def all(self, stmt: Executable) -> Sequence[Any]:
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def scalar(self, stmt: Executable) -> Any:
        """Single value from a ``RETURNING`` write; ``None`` when no row matched."""
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
