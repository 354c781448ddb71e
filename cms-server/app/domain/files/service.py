"""File lookup service that reuses already registered files by name."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

from app.domain.uploads import UploadError, UploadRequest, UploadService

from .models import FileRecord, FixtureFile
from .repository import FileRepository

logger = logging.getLogger(__name__)

ResolvedFiles = Union[FileRecord, list[FileRecord]]


def base_name(file_name: str) -> str:
    """File name without its extension (everything from the first dot)."""
    return file_name.split(".", 1)[0]


def extension(file_name: str) -> str:
    if "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[-1]


@dataclass(slots=True)
class FixtureDirectory:
    """Directory holding the binaries referenced by seed data."""

    root: Path

    def file_data(self, file_name: str) -> FixtureFile:
        path = self.root / file_name
        size = path.stat().st_size
        mimetype, _ = mimetypes.guess_type(f"file.{extension(file_name)}")
        return FixtureFile(
            path=str(path),
            original_file_name=file_name,
            size=size,
            mimetype=mimetype or "",
        )

    def read_bytes(self, fixture: FixtureFile) -> bytes:
        return Path(fixture.path).read_bytes()


@dataclass(slots=True)
class FileRegistry:
    repository: FileRepository
    uploads: UploadService
    fixtures: FixtureDirectory

    async def resolve(self, file_names: Sequence[str]) -> ResolvedFiles:
        """Return registered files for ``file_names``, uploading the missing ones.

        Existing files come first, then new uploads, each in input order. A
        single match is returned bare; anything else as a list.
        """
        existing: list[FileRecord] = []
        uploaded: list[FileRecord] = []

        for file_name in list(file_names):
            name = base_name(file_name)
            record = await self.repository.find_by_name(name)
            if record is not None:
                existing.append(record)
                continue

            uploaded.append(await self._upload_fixture(file_name, name))

        files = existing + uploaded
        if len(files) == 1:
            return files[0]
        return files

    async def _upload_fixture(self, file_name: str, name: str) -> FileRecord:
        try:
            fixture = self.fixtures.file_data(file_name)
            data = self.fixtures.read_bytes(fixture)
        except OSError as exc:
            raise UploadError(f"cannot read fixture {file_name}: {exc}") from exc

        logger.debug("Uploading fixture %s (%s bytes)", fixture.path, fixture.size)
        created = await self.uploads.upload(
            [
                UploadRequest(
                    file_name=fixture.original_file_name,
                    data=data,
                    mime=fixture.mimetype,
                    name=name,
                    caption=name,
                    alternative_text=f"An image uploaded to the content server called {name}",
                )
            ]
        )
        if not created:
            raise UploadError(f"upload of {file_name} returned no file records")
        return created[0]
