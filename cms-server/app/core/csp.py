"""Content-Security-Policy header allowing media from the bucket and the CDN."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.config import Settings


def _media_sources(settings: Settings) -> list[str]:
    storage = settings.upload_storage
    sources = ["'self'", "data:", "blob:"]
    if storage.bucket:
        region = f".{storage.region}" if storage.region else ""
        sources.append(f"{storage.bucket}.s3{region}.amazonaws.com")
    if storage.cdn_base:
        sources.append(storage.cdn_base)
    return sources


def build_content_security_policy(settings: Settings) -> dict[str, list[str]]:
    media = _media_sources(settings)
    return {
        "default-src": ["'self'"],
        "connect-src": ["'self'", "https:"],
        "img-src": media,
        "media-src": list(media),
        "frame-ancestors": ["'self'"],
    }


def render_policy(directives: dict[str, list[str]]) -> str:
    return "; ".join(f"{name} {' '.join(values)}" for name, values in directives.items())


class ContentSecurityPolicyMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, policy: str) -> None:
        super().__init__(app)
        self.policy = policy

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers.setdefault("Content-Security-Policy", self.policy)
        return response
