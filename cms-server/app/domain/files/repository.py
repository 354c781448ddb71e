"""Repository protocol for file record persistence."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import FileRecord


class FileRepository(Protocol):
    async def find_by_name(self, name: str) -> FileRecord | None:
        ...

    async def get_by_id(self, file_id: int) -> FileRecord | None:
        ...

    async def list_files(self, limit: int, offset: int) -> Sequence[FileRecord]:
        ...

    async def count_files(self) -> int:
        ...

    async def create(
        self,
        *,
        name: str,
        alternative_text: str | None,
        caption: str | None,
        ext: str | None,
        mime: str | None,
        size: int,
        url: str,
        provider: str,
        folder_path: str,
    ) -> FileRecord:
        ...
