"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings, mask_secret
from app.domain.common import SqlUnitOfWork
from app.domain.files import CdnUrlRewriter
from app.domain.files.service import FileRegistry, FixtureDirectory
from app.domain.marketing import MarketingService
from app.domain.permissions.service import PermissionService
from app.domain.seed import SeedData, SeedOrchestrator
from app.domain.store import OneTimeRunFlag
from app.domain.uploads import UploadPipeline, UploadProvider, UploadService, folder_hook, logging_hook
from app.infrastructure.database.repositories import (
    SqlEntryRepository,
    SqlFileRepository,
    SqlStoreRepository,
)
from app.infrastructure.database.session import get_engine
from app.infrastructure.marketing import MailchimpClient, SubscriptionFormClient
from app.infrastructure.storage import build_upload_provider

logger = logging.getLogger(__name__)


def _resolve_path(path: Path, root: Optional[Path] = None) -> Path:
    if path.is_absolute():
        return path
    return ((root or Path.cwd()) / path).resolve()


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    upload_provider: Optional[UploadProvider] = None
    upload_pipeline: UploadPipeline = field(default_factory=UploadPipeline)
    http_client: Optional[httpx.AsyncClient] = None

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, upload provider) exist."""
        get_engine()
        storage = self.settings.upload_storage
        if self.upload_provider is None:
            if storage.provider == "local":
                storage = storage.model_copy(update={"local_root": _resolve_path(storage.local_root)})
            self.upload_provider = build_upload_provider(storage)
        if not self.upload_pipeline.hooks:
            self.upload_pipeline.register(logging_hook(self.upload_provider.describe()))
            self.upload_pipeline.register(folder_hook(storage.folder_path))
        logger.info("Upload provider configured: %s", self.upload_provider.describe())

    def log_configuration(self) -> None:
        marketing = self.settings.marketing_config
        logger.info(
            "Marketing configuration: api_key=%s campaign_id=%s",
            mask_secret(marketing.api_key),
            marketing.campaign_id or "not configured",
        )

    @property
    def url_rewriter(self) -> CdnUrlRewriter:
        return CdnUrlRewriter(cdn_base=self.settings.cdn_base, api_host=self.settings.api_host)

    def get_http_client(self) -> httpx.AsyncClient:
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(timeout=self.settings.marketing_config.timeout)
        return self.http_client

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None

    def upload_service(self, session: AsyncSession) -> UploadService:
        if self.upload_provider is None:
            self.init_infrastructure()
        assert self.upload_provider is not None  # for mypy
        return UploadService(SqlFileRepository(session), self.upload_provider, self.upload_pipeline)

    def file_registry(self, session: AsyncSession) -> FileRegistry:
        fixtures = FixtureDirectory(_resolve_path(self.settings.seed.data_dir) / "uploads")
        return FileRegistry(SqlFileRepository(session), self.upload_service(session), fixtures)

    def seed_orchestrator(self, session: AsyncSession) -> SeedOrchestrator:
        data = SeedData.load(_resolve_path(self.settings.seed.data_dir))
        return SeedOrchestrator(
            flag=OneTimeRunFlag.for_environment(SqlStoreRepository(session), self.settings.environment),
            permissions=PermissionService.with_session(session),
            entries=SqlEntryRepository(session),
            resolve_files=self.file_registry(session).resolve,
            unit_of_work=SqlUnitOfWork(session),
            data=data,
        )

    def marketing_service(self) -> MarketingService:
        client = self.get_http_client()
        marketing = self.settings.marketing_config
        return MarketingService(
            mailchimp=MailchimpClient(client, marketing.api_key),
            forms=SubscriptionFormClient(client),
            settings=marketing,
        )


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
