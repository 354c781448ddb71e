"""Repository protocol for entry persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence

from .models import Entry


class EntryRepository(Protocol):
    async def create(
        self,
        *,
        content_type: str,
        data: dict[str, Any],
        published_at: datetime | None,
    ) -> Entry:
        ...

    async def list_by_type(
        self, content_type: str, limit: int, offset: int, published_only: bool = True
    ) -> tuple[Sequence[Entry], int]:
        ...

    async def get_by_document_id(self, content_type: str, document_id: str) -> Entry | None:
        ...

    async def count_by_type(self, content_type: str) -> int:
        ...
