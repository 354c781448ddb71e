"""SQL repository implementations."""

from .entry_repository import SqlEntryRepository
from .file_repository import SqlFileRepository
from .permission_repository import SqlPermissionRepository
from .store_repository import SqlStoreRepository

__all__ = [
    "SqlEntryRepository",
    "SqlFileRepository",
    "SqlPermissionRepository",
    "SqlStoreRepository",
]
