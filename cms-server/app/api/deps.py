"""Reusable FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Awaitable, Callable

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import ApplicationContainer, get_container
from app.domain.files import CdnUrlRewriter
from app.domain.marketing import MarketingService
from app.domain.permissions.service import PermissionService
from app.infrastructure.database.session import get_session


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def get_app_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    return container if container is not None else get_container()


def get_url_rewriter(container: ApplicationContainer = Depends(get_app_container)) -> CdnUrlRewriter:
    return container.url_rewriter


def get_marketing_service(container: ApplicationContainer = Depends(get_app_container)) -> MarketingService:
    return container.marketing_service()


def require_public_permission(controller: str, action: str) -> Callable[..., Awaitable[None]]:
    """Dependency rejecting anonymous calls the public role was not granted."""

    async def dependency(db: AsyncSession = Depends(get_db_session)) -> None:
        if not await PermissionService.with_session(db).is_allowed(controller, action):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    return dependency


__all__ = [
    "get_app_container",
    "get_db_session",
    "get_marketing_service",
    "get_url_rewriter",
    "require_public_permission",
]
