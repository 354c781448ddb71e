"""Entry domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from app.db import models as orm

CONTENT_TYPES = ("category", "author", "article", "global", "about")


@dataclass(slots=True)
class Entry:
    id: int
    document_id: str
    content_type: str
    data: dict[str, Any]
    published_at: Optional[datetime]
    created_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.Entry) -> "Entry":
        return cls(
            id=instance.id,
            document_id=instance.document_id,
            content_type=instance.content_type,
            data=dict(instance.data or {}),
            published_at=instance.published_at,
            created_at=instance.created_at,
        )


@dataclass(slots=True)
class EntryPage:
    total: int
    entries: list[Entry]
