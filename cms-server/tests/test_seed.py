"""Tests for the one-time seed import."""
import json
from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select

from app.core.config import Settings
from app.core.container import ApplicationContainer
from app.db.models import Entry as EntryModel, UploadFile
from app.domain.files import FileRecord
from app.domain.permissions.service import PermissionService
from app.domain.seed import (
    MARKETING_PERMISSIONS,
    PUBLIC_CONTENT_PERMISSIONS,
    SeedData,
    SeedDataError,
    SeedOrchestrator,
    seed_example_app,
)
from app.domain.store import OneTimeRunFlag
from app.domain.uploads import UploadError

from conftest import DATA_DIR, InMemoryEntryRepository

FIXED_NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)

SEED = {
    "categories": [{"name": "news", "slug": "news"}, {"name": "tech", "slug": "tech"}],
    "authors": [{"name": "David Doe", "avatar": "david.jpg"}],
    "articles": [
        {
            "title": "Hello",
            "slug": "hello",
            "blocks": [
                {"__component": "shared.media", "file": "hello-inline.jpg"},
                {"__component": "shared.rich-text", "body": "Hi"},
            ],
        }
    ],
    "global": {"siteName": "Site", "defaultSeo": {"metaTitle": "Site"}},
    "about": {"title": "About", "blocks": [{"__component": "shared.quote", "title": "Q", "body": "B"}]},
}


class FakeFiles:
    """Resolver handing out one record per name."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.requested: list[list[str]] = []
        self.fail_on = fail_on

    async def __call__(self, names):
        self.requested.append(list(names))
        if self.fail_on in names:
            raise UploadError(f"cannot upload {self.fail_on}")
        records = [
            FileRecord(id=index, name=name.split(".", 1)[0], size=1, mime="image/jpeg", url=f"/uploads/{name}")
            for index, name in enumerate(names, start=1)
        ]
        return records[0] if len(records) == 1 else records


@pytest.fixture
def make_orchestrator(store_repository, permission_repository, unit_of_work):
    def build(entries=None, files=None, data=None) -> SeedOrchestrator:
        return SeedOrchestrator(
            flag=OneTimeRunFlag.for_environment(store_repository, "test"),
            permissions=PermissionService(permission_repository),
            entries=entries if entries is not None else InMemoryEntryRepository(),
            resolve_files=files or FakeFiles(),
            unit_of_work=unit_of_work,
            data=data or SeedData.from_mapping(SEED),
            clock=lambda: FIXED_NOW,
        )

    return build


class TestSeedData:
    def test_global_key_maps_to_global_settings(self):
        data = SeedData.from_mapping(SEED)

        assert data.global_settings["siteName"] == "Site"
        assert len(data.categories) == 2

    def test_load_reads_data_json(self, tmp_path):
        (tmp_path / "data.json").write_text(json.dumps(SEED), encoding="utf-8")

        assert SeedData.load(tmp_path).about["title"] == "About"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SeedDataError):
            SeedData.load(tmp_path)

    def test_invalid_json(self, tmp_path):
        (tmp_path / "data.json").write_text("{nope", encoding="utf-8")

        with pytest.raises(SeedDataError):
            SeedData.load(tmp_path)

    def test_bundled_data_is_loadable(self):
        data = SeedData.load(DATA_DIR)

        assert data.articles
        for article in data.articles:
            assert (DATA_DIR / "uploads" / f"{article['slug']}.jpg").exists()


class TestSeedOrchestrator:
    @pytest.mark.asyncio
    async def test_first_run_creates_every_entry(self, make_orchestrator):
        entries = InMemoryEntryRepository()
        files = FakeFiles()

        report = await make_orchestrator(entries=entries, files=files).run()

        assert report.seeded
        assert dict(report.created) == {"category": 2, "author": 1, "article": 1, "global": 1, "about": 1}
        assert report.failed == []
        assert ["hello.jpg"] in files.requested
        assert ["favicon.png"] in files.requested
        assert ["default-image.png"] in files.requested

        article = entries.of_type("article")[0]
        assert article["cover"]["url"] == "/uploads/hello.jpg"
        assert article["blocks"][0]["file"]["name"] == "hello-inline"
        assert article["blocks"][1] == {"__component": "shared.rich-text", "body": "Hi"}
        assert entries.of_type("author")[0]["avatar"]["name"] == "david"

        site = entries.of_type("global")[0]
        assert site["favicon"]["name"] == "favicon"
        assert site["defaultSeo"] == {
            "metaTitle": "Site",
            "shareImage": {"id": 1, "name": "default-image", "mime": "image/jpeg", "size": 1, "url": "/uploads/default-image.png"},
        }

    @pytest.mark.asyncio
    async def test_second_run_creates_nothing(self, make_orchestrator):
        entries = InMemoryEntryRepository()

        first = await make_orchestrator(entries=entries).run()
        created = len(entries.created)
        second = await make_orchestrator(entries=entries).run()

        assert first.seeded
        assert not second.seeded
        assert len(entries.created) == created

    @pytest.mark.asyncio
    async def test_permissions_are_granted_once(self, make_orchestrator, permission_repository):
        report = await make_orchestrator().run()

        expected = sum(len(actions) for actions in {**PUBLIC_CONTENT_PERMISSIONS, **MARKETING_PERMISSIONS}.values())
        assert len(report.granted) == expected
        assert "api::article.article.find" in report.granted
        assert "api::marketing.marketing.sendNewsletter" in report.granted

        again = await PermissionService(permission_repository).grant(PUBLIC_CONTENT_PERMISSIONS)
        assert again == []
        assert len(permission_repository.permissions) == expected

    @pytest.mark.asyncio
    async def test_failed_entry_is_skipped(self, make_orchestrator, unit_of_work):
        entries = InMemoryEntryRepository(fail_on={"news"})

        report = await make_orchestrator(entries=entries).run()

        assert report.created["category"] == 1
        assert [entry["slug"] for entry in entries.of_type("category")] == ["tech"]
        assert len(report.failed) == 1
        assert report.failed[0].model == "category"
        assert unit_of_work.rollbacks == 1
        assert report.created["article"] == 1

    @pytest.mark.asyncio
    async def test_upload_error_aborts_the_import(self, make_orchestrator, unit_of_work):
        entries = InMemoryEntryRepository()
        orchestrator = make_orchestrator(entries=entries, files=FakeFiles(fail_on="hello.jpg"))

        with pytest.raises(UploadError):
            await orchestrator.run()

        assert len(entries.of_type("category")) == 2
        assert len(entries.of_type("author")) == 1
        assert entries.of_type("article") == []
        assert entries.of_type("global") == []
        assert unit_of_work.commits > 0

    @pytest.mark.asyncio
    async def test_upload_error_still_marks_setup_as_done(self, make_orchestrator):
        with pytest.raises(UploadError):
            await make_orchestrator(files=FakeFiles(fail_on="hello.jpg")).run()

        assert not (await make_orchestrator().run()).seeded

    @pytest.mark.asyncio
    async def test_empty_global_and_about_are_skipped(self, make_orchestrator):
        entries = InMemoryEntryRepository()
        data = SeedData.from_mapping({"categories": [{"name": "only", "slug": "only"}]})

        report = await make_orchestrator(entries=entries, data=data).run()

        assert dict(report.created) == {"category": 1}

    @pytest.mark.asyncio
    async def test_seed_example_app_logs_failures(self, make_orchestrator, caplog):
        async def build():
            return make_orchestrator(files=FakeFiles(fail_on="hello.jpg"))

        assert await seed_example_app(build) is None
        assert "Could not import seed data" in caplog.text


class TestSeedAgainstDatabase:
    @pytest.mark.asyncio
    async def test_bundled_seed_runs_once(self, db_session, tmp_path, monkeypatch):
        monkeypatch.delenv("STORAGE__LOCAL_ROOT", raising=False)
        settings = Settings(
            _env_file=None,
            environment="test",
            storage={"provider": "local", "local_root": str(tmp_path / "uploads")},
            seed={"data_dir": str(DATA_DIR)},
        )
        container = ApplicationContainer(settings=settings)
        container.init_infrastructure()

        report = await container.seed_orchestrator(db_session).run()

        assert report.seeded
        assert report.failed == []
        assert dict(report.created) == {"category": 3, "author": 2, "article": 2, "global": 1, "about": 1}

        names = (await db_session.execute(select(UploadFile.name).order_by(UploadFile.id))).scalars().all()
        assert sorted(names) == sorted(
            [
                "david-doe",
                "sarah-baker",
                "shipping-media-through-a-cdn",
                "coffee-art",
                "a-walk-in-the-forest",
                "forest-trail",
                "favicon",
                "default-image",
            ]
        )
        assert len(list((tmp_path / "uploads").iterdir())) == len(names)

        article = (
            await db_session.execute(select(EntryModel).where(EntryModel.content_type == "article").order_by(EntryModel.id))
        ).scalars().all()[1]
        slider = article.data["blocks"][1]
        assert [item["name"] for item in slider["files"]] == ["coffee-art", "forest-trail"]

        again = await container.seed_orchestrator(db_session).run()
        total = await db_session.scalar(select(func.count()).select_from(EntryModel))
        assert not again.seeded
        assert total == 9
