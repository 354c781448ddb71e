"""Default hooks installed around the upload service at startup."""

from __future__ import annotations

import logging
import time

from .models import UploadContext
from .pipeline import UploadHook

logger = logging.getLogger("app.uploads")


def logging_hook(provider_summary: dict[str, object] | None = None) -> UploadHook:
    """Log each upload call, its duration and the stored records."""

    async def before(context: UploadContext) -> None:
        logger.info(
            "Uploading %d file(s) through provider %s: %s",
            len(context.requests),
            context.provider,
            [request.file_name for request in context.requests],
        )
        if provider_summary:
            logger.debug("Provider configuration: %s", provider_summary)

    async def after(context: UploadContext) -> None:
        duration_ms = int((time.monotonic() - context.started_at) * 1000)
        logger.info(
            "Upload finished in %dms: %s",
            duration_ms,
            [
                {"id": getattr(record, "id", None), "name": getattr(record, "name", None), "url": getattr(record, "url", None)}
                for record in context.results
            ],
        )

    async def on_error(context: UploadContext, exc: BaseException) -> None:
        duration_ms = int((time.monotonic() - context.started_at) * 1000)
        logger.error(
            "Upload failed after %dms (%s): %s code=%s",
            duration_ms,
            type(exc).__name__,
            exc,
            getattr(exc, "code", None),
        )

    return UploadHook(name="logging", before=before, after=after, on_error=on_error)


def folder_hook(folder_path: str) -> UploadHook:
    """Place requests without an explicit folder under ``folder_path``."""
    normalized = "/" + folder_path.strip("/") if folder_path.strip("/") else "/"

    async def before(context: UploadContext) -> None:
        for request in context.requests:
            if not request.folder_path:
                request.folder_path = normalized

    return UploadHook(name="folder", before=before)
