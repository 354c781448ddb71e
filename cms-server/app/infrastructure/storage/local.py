"""Filesystem upload provider used in development and tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from app.domain.uploads import UploadError


class LocalUploadProvider:
    name = "local"

    def __init__(self, root: Path, public_path: str = "/uploads") -> None:
        self.root = Path(root)
        self.public_path = "/" + public_path.strip("/")

    def _target(self, key: str) -> Path:
        target = (self.root / key).resolve()
        if self.root.resolve() not in target.parents:
            raise UploadError(f"refusing to write outside the upload root: {key}")
        return target

    async def upload(self, key: str, data: bytes, content_type: Optional[str]) -> str:
        target = self._target(key)
        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as exc:
            raise UploadError(f"could not write {target}: {exc}") from exc
        return f"{self.public_path}/{key}"

    async def delete(self, key: str) -> None:
        target = self._target(key)
        try:
            await asyncio.to_thread(target.unlink, missing_ok=True)
        except OSError as exc:
            raise UploadError(f"could not remove {target}: {exc}") from exc

    def describe(self) -> dict[str, object]:
        return {"provider": self.name, "root": str(self.root), "public_path": self.public_path}

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
