"""One-time import of the example content."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Sequence

from app.domain.common import UnitOfWork
from app.domain.content import parse_blocks, rewrite_blocks, serialize_blocks, serialize_files
from app.domain.content.repository import EntryRepository
from app.domain.content.rewriter import Resolver
from app.domain.permissions.service import PermissionService
from app.domain.store import OneTimeRunFlag
from app.domain.uploads import UploadError

from .data import SeedData
from .exceptions import SeedEntryError

logger = logging.getLogger(__name__)

PUBLIC_CONTENT_PERMISSIONS: dict[str, list[str]] = {
    "article": ["find", "findOne"],
    "category": ["find", "findOne"],
    "author": ["find", "findOne"],
    "global": ["find", "findOne"],
    "about": ["find", "findOne"],
}

MARKETING_PERMISSIONS: dict[str, list[str]] = {
    "marketing": ["sendNewsletter", "contact", "interest"],
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class SeedReport:
    seeded: bool
    created: Counter = field(default_factory=Counter)
    failed: list[SeedEntryError] = field(default_factory=list)
    granted: list[str] = field(default_factory=list)


@dataclass(slots=True)
class SeedOrchestrator:
    flag: OneTimeRunFlag
    permissions: PermissionService
    entries: EntryRepository
    resolve_files: Resolver
    unit_of_work: UnitOfWork
    data: SeedData
    clock: Callable[[], datetime] = _utcnow

    async def run(self) -> SeedReport:
        """Import the seed data unless the flag says it already happened.

        The flag is committed before any entry is created, so a crash midway
        leaves partial data that is never re-imported automatically.
        """
        first_run = await self.flag.claim()
        await self.unit_of_work.commit()
        if not first_run:
            logger.info(
                "Seed data has already been imported. "
                "It cannot be imported again unless the database is cleared first."
            )
            return SeedReport(seeded=False)

        logger.info("Setting up the example content...")
        report = SeedReport(seeded=True)
        try:
            await self._import(report)
        except UploadError:
            # Files registered before the failure stay registered.
            await self.unit_of_work.commit()
            raise
        logger.info("Seeding finished: created=%s failed=%d", dict(report.created), len(report.failed))
        return report

    async def _import(self, report: SeedReport) -> None:
        report.granted = await self.permissions.grant({**PUBLIC_CONTENT_PERMISSIONS, **MARKETING_PERMISSIONS})
        await self.unit_of_work.commit()

        await self._import_categories(report)
        await self._import_authors(report)
        await self._import_articles(report)
        await self._import_global(report)
        await self._import_about(report)

    async def _resolve(self, file_names: Sequence[str]) -> Any:
        resolved = await self.resolve_files(file_names)
        # Uploaded files are kept even when the entry that needs them fails.
        await self.unit_of_work.commit()
        return serialize_files(resolved)

    async def _resolve_blocks(self, raw_blocks: Any) -> list[dict[str, Any]]:
        blocks = await rewrite_blocks(parse_blocks(raw_blocks), self.resolve_files)
        await self.unit_of_work.commit()
        return serialize_blocks(blocks)

    async def _create_entry(self, report: SeedReport, model: str, entry: dict[str, Any]) -> None:
        try:
            await self.entries.create(content_type=model, data=entry, published_at=self.clock())
            await self.unit_of_work.commit()
        except Exception as exc:
            await self.unit_of_work.rollback()
            error = SeedEntryError(model, entry, exc)
            logger.error("Skipping %s entry %r: %s", model, entry.get("slug") or entry.get("name") or entry.get("title"), exc)
            report.failed.append(error)
            return
        report.created[model] += 1

    async def _import_categories(self, report: SeedReport) -> None:
        for category in self.data.categories:
            await self._create_entry(report, "category", dict(category))

    async def _import_authors(self, report: SeedReport) -> None:
        for author in self.data.authors:
            entry = dict(author)
            if author.get("avatar"):
                entry["avatar"] = await self._resolve([author["avatar"]])
            await self._create_entry(report, "author", entry)

    async def _import_articles(self, report: SeedReport) -> None:
        for article in self.data.articles:
            entry = dict(article)
            if article.get("slug"):
                entry["cover"] = await self._resolve([f"{article['slug']}.jpg"])
            entry["blocks"] = await self._resolve_blocks(article.get("blocks"))
            await self._create_entry(report, "article", entry)

    async def _import_global(self, report: SeedReport) -> None:
        if not self.data.global_settings:
            return
        settings = self.data.global_settings
        favicon = await self._resolve(["favicon.png"])
        share_image = await self._resolve(["default-image.png"])
        entry = {
            **settings,
            "favicon": favicon,
            "defaultSeo": {**(settings.get("defaultSeo") or {}), "shareImage": share_image},
        }
        await self._create_entry(report, "global", entry)

    async def _import_about(self, report: SeedReport) -> None:
        if not self.data.about:
            return
        entry = {**self.data.about, "blocks": await self._resolve_blocks(self.data.about.get("blocks"))}
        await self._create_entry(report, "about", entry)


async def seed_example_app(
    build: Callable[[], Awaitable[SeedOrchestrator]],
) -> SeedReport | None:
    """Run the orchestrator, logging instead of raising when the import aborts."""
    try:
        orchestrator = await build()
        return await orchestrator.run()
    except Exception:
        logger.exception("Could not import seed data")
        return None
