"""Domain models for stored files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from app.db import models as orm


@dataclass(slots=True, frozen=True)
class FileRecord:
    id: int
    name: str
    size: int
    mime: Optional[str]
    url: str
    ext: Optional[str] = None
    provider: str = "local"
    alternative_text: Optional[str] = None
    caption: Optional[str] = None
    folder_path: str = "/"
    created_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.UploadFile) -> "FileRecord":
        return cls(
            id=instance.id,
            name=instance.name,
            size=instance.size or 0,
            mime=instance.mime,
            url=instance.url,
            ext=instance.ext,
            provider=instance.provider,
            alternative_text=instance.alternative_text,
            caption=instance.caption,
            folder_path=instance.folder_path or "/",
            created_at=instance.created_at,
        )

    def to_reference(self) -> dict[str, Any]:
        """Mapping stored inside entry data wherever a file is attached."""
        return {
            "id": self.id,
            "name": self.name,
            "mime": self.mime,
            "size": self.size,
            "url": self.url,
        }


@dataclass(slots=True, frozen=True)
class FixtureFile:
    """Metadata of a local file about to be uploaded."""

    path: str
    original_file_name: str
    size: int
    mimetype: str
