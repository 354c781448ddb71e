"""File domain exports."""

from .models import FileRecord, FixtureFile
from .repository import FileRepository
from .urls import CdnUrlRewriter, normalize_cdn_base, rewrite_file_url

__all__ = [
    "CdnUrlRewriter",
    "FileRecord",
    "FileRepository",
    "FixtureFile",
    "normalize_cdn_base",
    "rewrite_file_url",
]
