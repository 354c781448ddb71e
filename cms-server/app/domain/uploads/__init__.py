"""Upload domain exports."""

from .exceptions import UploadError
from .hooks import folder_hook, logging_hook
from .models import UploadContext, UploadRequest
from .pipeline import UploadHook, UploadPipeline
from .providers import UploadProvider
from .service import UploadService, object_key

__all__ = [
    "UploadContext",
    "UploadError",
    "UploadHook",
    "UploadPipeline",
    "UploadProvider",
    "UploadRequest",
    "UploadService",
    "folder_hook",
    "logging_hook",
    "object_key",
]
