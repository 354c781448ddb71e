"""Domain models for upload requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True)
class UploadRequest:
    file_name: str
    data: bytes
    mime: Optional[str] = None
    name: Optional[str] = None
    caption: Optional[str] = None
    alternative_text: Optional[str] = None
    folder_path: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def display_name(self) -> str:
        return self.name or self.file_name.split(".", 1)[0]

    @property
    def ext(self) -> str:
        if "." not in self.file_name:
            return ""
        return "." + self.file_name.rsplit(".", 1)[-1].lower()


@dataclass(slots=True)
class UploadContext:
    """State shared by hooks for one call of the upload service."""

    requests: list[UploadRequest]
    provider: str
    started_at: float
    results: list[Any] = field(default_factory=list)
    extras: dict[str, Any] = field(default_factory=dict)
