"""Upload provider implementations."""

from __future__ import annotations

from app.core.config import StorageSettings
from app.domain.uploads import UploadProvider

from .local import LocalUploadProvider
from .s3 import S3UploadProvider


def build_upload_provider(settings: StorageSettings) -> UploadProvider:
    if settings.provider == "aws-s3":
        return S3UploadProvider(settings)
    return LocalUploadProvider(settings.local_root, settings.public_path)


__all__ = ["LocalUploadProvider", "S3UploadProvider", "build_upload_provider"]
