from fastapi import APIRouter

from app.api.routers import content, marketing, upload


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(marketing.router, prefix="/marketing", tags=["marketing"])
    router.include_router(upload.router, prefix="/upload", tags=["upload"])
    # Catch-all content routes go last so they do not shadow the ones above.
    router.include_router(content.router, tags=["content"])
    return router


__all__ = [
    "create_api_router",
]
