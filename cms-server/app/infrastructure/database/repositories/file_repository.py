"""SQLAlchemy implementation for the file repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select

from app.db.models import UploadFile
from app.domain.common import AsyncRepository
from app.domain.files.models import FileRecord


class SqlFileRepository(AsyncRepository[UploadFile]):
    async def find_by_name(self, name: str) -> FileRecord | None:
        stmt = select(UploadFile).where(UploadFile.name == name).order_by(UploadFile.id).limit(1)
        model = await self.first(stmt)
        return FileRecord.from_orm(model) if model else None

    async def get_by_id(self, file_id: int) -> FileRecord | None:
        model = await self.session.get(UploadFile, file_id)
        return FileRecord.from_orm(model) if model else None

    async def list_files(self, limit: int, offset: int) -> Sequence[FileRecord]:
        stmt = select(UploadFile).order_by(UploadFile.id).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [FileRecord.from_orm(model) for model in result.scalars().all()]

    async def count_files(self) -> int:
        total = await self.session.scalar(select(func.count()).select_from(UploadFile))
        return int(total or 0)

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
        model = await self.add(
            UploadFile(
                name=name,
                alternative_text=alternative_text,
                caption=caption,
                ext=ext,
                mime=mime,
                size=size,
                url=url,
                provider=provider,
                folder_path=folder_path,
            )
        )
        return FileRecord.from_orm(model)
