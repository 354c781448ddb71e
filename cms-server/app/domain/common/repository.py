"""Base class for the SQL repositories."""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class AsyncRepository(Generic[ModelT]):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def add(self, instance: ModelT) -> ModelT:
        """Persist ``instance`` and load server-side defaults such as ``created_at``."""
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def first(self, stmt: Select[Any]) -> Optional[Any]:
        result = await self.session.execute(stmt)
        return result.scalars().first()
