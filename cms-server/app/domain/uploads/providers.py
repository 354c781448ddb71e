"""Upload provider protocol implemented by the storage backends."""

from __future__ import annotations

from typing import Protocol


class UploadProvider(Protocol):
    name: str

    async def upload(self, key: str, data: bytes, content_type: str | None) -> str:
        """Store ``data`` under ``key`` and return the URL it is served from."""
        ...

    async def delete(self, key: str) -> None:
        ...

    def describe(self) -> dict[str, object]:
        """Configuration summary safe to log."""
        ...
