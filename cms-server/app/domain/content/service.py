"""Read access to published entries."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.repositories.entry_repository import SqlEntryRepository

from .models import CONTENT_TYPES, Entry, EntryPage
from .repository import EntryRepository


class UnknownContentTypeError(LookupError):
    """Raised for a content type the server does not define."""


@dataclass(slots=True)
class EntryService:
    repository: EntryRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "EntryService":
        return cls(SqlEntryRepository(session))

    @staticmethod
    def ensure_known(content_type: str) -> None:
        if content_type not in CONTENT_TYPES:
            raise UnknownContentTypeError(content_type)

    async def list_entries(self, content_type: str, limit: int = 25, offset: int = 0) -> EntryPage:
        self.ensure_known(content_type)
        entries, total = await self.repository.list_by_type(content_type, limit, offset)
        return EntryPage(total=total, entries=list(entries))

    async def get_entry(self, content_type: str, document_id: str) -> Entry | None:
        self.ensure_known(content_type)
        return await self.repository.get_by_document_id(content_type, document_id)
