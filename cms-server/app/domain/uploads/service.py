"""Upload service storing binaries through a provider and registering them."""

from __future__ import annotations

import logging
import re
import time
import uuid
from dataclasses import dataclass, field
from typing import Sequence

from app.domain.files.models import FileRecord
from app.domain.files.repository import FileRepository

from .exceptions import UploadError
from .models import UploadContext, UploadRequest
from .pipeline import UploadPipeline
from .providers import UploadProvider

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^a-z0-9_-]+")


def object_key(request: UploadRequest) -> str:
    """Storage key: ``<folder>/<slug>_<hash><ext>``."""
    slug = _UNSAFE_KEY_CHARS.sub("-", request.display_name.lower()).strip("-") or "file"
    folder = (request.folder_path or "").strip("/")
    key = f"{slug}_{uuid.uuid4().hex[:10]}{request.ext}"
    return f"{folder}/{key}" if folder else key


@dataclass(slots=True)
class UploadService:
    repository: FileRepository
    provider: UploadProvider
    pipeline: UploadPipeline = field(default_factory=UploadPipeline)

    async def upload(self, requests: Sequence[UploadRequest]) -> list[FileRecord]:
        context = UploadContext(
            requests=list(requests),
            provider=self.provider.name,
            started_at=time.monotonic(),
        )
        return await self.pipeline.run(context, self._store)

    async def _store(self, context: UploadContext) -> list[FileRecord]:
        stored: list[str] = []
        try:
            return await self._store_all(context, stored)
        except Exception:
            await self._discard(stored)
            raise

    async def _discard(self, keys: Sequence[str]) -> None:
        """Remove objects stored earlier in a batch that did not complete."""
        for key in keys:
            try:
                await self.provider.delete(key)
            except UploadError as exc:
                logger.warning("Could not remove %s after a failed upload: %s", key, exc)
            else:
                logger.info("Removed %s after a failed upload", key)

    async def _store_all(self, context: UploadContext, stored: list[str]) -> list[FileRecord]:
        records: list[FileRecord] = []
        for request in context.requests:
            if request.size == 0:
                raise ValueError(f"uploaded file {request.file_name} is empty")

            key = object_key(request)
            try:
                url = await self.provider.upload(key, request.data, request.mime or None)
            except UploadError:
                raise
            except Exception as exc:
                raise UploadError(f"provider {self.provider.name} failed to store {request.file_name}: {exc}") from exc
            stored.append(key)

            record = await self.repository.create(
                name=request.display_name,
                alternative_text=request.alternative_text,
                caption=request.caption,
                ext=request.ext or None,
                mime=request.mime or None,
                size=request.size,
                url=url,
                provider=self.provider.name,
                folder_path=request.folder_path or "/",
            )
            logger.debug("Registered file %s as #%s", key, record.id)
            records.append(record)
        return records
