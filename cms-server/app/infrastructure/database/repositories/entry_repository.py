"""SQLAlchemy implementation for the entry repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import func, select

from app.db.models import Entry as EntryModel
from app.domain.common import AsyncRepository
from app.domain.content.models import Entry


class SqlEntryRepository(AsyncRepository[EntryModel]):
    async def create(
        self,
        *,
        content_type: str,
        data: dict[str, Any],
        published_at: datetime | None,
    ) -> Entry:
        model = await self.add(
            EntryModel(content_type=content_type, data=data, published_at=published_at)
        )
        return Entry.from_orm(model)

    async def list_by_type(
        self, content_type: str, limit: int, offset: int, published_only: bool = True
    ) -> tuple[Sequence[Entry], int]:
        filters = [EntryModel.content_type == content_type]
        if published_only:
            filters.append(EntryModel.published_at.is_not(None))

        total = await self.session.scalar(select(func.count()).select_from(EntryModel).where(*filters))
        stmt = select(EntryModel).where(*filters).order_by(EntryModel.id).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [Entry.from_orm(model) for model in result.scalars().all()], int(total or 0)

    async def get_by_document_id(self, content_type: str, document_id: str) -> Entry | None:
        stmt = select(EntryModel).where(
            EntryModel.content_type == content_type,
            EntryModel.document_id == document_id,
        )
        model = await self.first(stmt)
        return Entry.from_orm(model) if model else None

    async def count_by_type(self, content_type: str) -> int:
        total = await self.session.scalar(
            select(func.count()).select_from(EntryModel).where(EntryModel.content_type == content_type)
        )
        return int(total or 0)
