"""Tests for name based file deduplication."""
import pytest

from app.domain.files.service import FileRegistry, FixtureDirectory, base_name, extension
from app.domain.uploads import UploadError, UploadPipeline, UploadService

from conftest import RecordingProvider


@pytest.fixture
def fixtures(tmp_path) -> FixtureDirectory:
    for name in ("logo.png", "a.jpg", "b.jpg", "new.png", "old.png"):
        (tmp_path / name).write_bytes(b"\x89PNG-" + name.encode())
    return FixtureDirectory(tmp_path)


@pytest.fixture
def registry(file_repository, upload_service, fixtures) -> FileRegistry:
    return FileRegistry(file_repository, upload_service, fixtures)


class TestNames:
    def test_base_name_strips_from_first_dot(self):
        assert base_name("logo.png") == "logo"
        assert base_name("archive.tar.gz") == "archive"
        assert base_name("README") == "README"

    def test_extension(self):
        assert extension("archive.tar.gz") == "gz"
        assert extension("README") == ""


class TestFixtureDirectory:
    def test_file_data_guesses_mime_from_extension(self, fixtures):
        fixture = fixtures.file_data("logo.png")

        assert fixture.original_file_name == "logo.png"
        assert fixture.mimetype == "image/png"
        assert fixture.size == len(b"\x89PNG-logo.png")


class TestFileRegistryResolve:
    @pytest.mark.asyncio
    async def test_existing_file_is_reused_without_upload(self, registry, file_repository, provider):
        """A single known name returns the stored record and uploads nothing."""
        existing = file_repository.add_existing("logo")

        result = await registry.resolve(["logo.png"])

        assert result == existing
        assert provider.objects == {}

    @pytest.mark.asyncio
    async def test_missing_files_are_uploaded_in_order(self, registry, provider):
        result = await registry.resolve(["a.jpg", "b.jpg"])

        assert isinstance(result, list)
        assert [record.name for record in result] == ["a", "b"]
        assert len(provider.objects) == 2
        assert result[0].mime == "image/jpeg"
        assert result[0].alternative_text == "An image uploaded to the content server called a"
        assert result[0].caption == "a"

    @pytest.mark.asyncio
    async def test_existing_records_come_before_new_uploads(self, registry, file_repository):
        old = file_repository.add_existing("old")

        result = await registry.resolve(["new.png", "old.png"])

        assert [record.name for record in result] == ["old", "new"]
        assert result[0] == old

    @pytest.mark.asyncio
    async def test_uploaded_file_is_visible_to_the_next_lookup(self, registry, provider):
        first = await registry.resolve(["a.jpg"])
        second = await registry.resolve(["a.jpg"])

        assert second == first
        assert len(provider.objects) == 1

    @pytest.mark.asyncio
    async def test_no_names_gives_empty_list(self, registry):
        assert await registry.resolve([]) == []

    @pytest.mark.asyncio
    async def test_missing_fixture_raises_upload_error(self, registry):
        with pytest.raises(UploadError):
            await registry.resolve(["missing.png"])

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, file_repository, fixtures):
        failing = UploadService(file_repository, RecordingProvider(fail_with=RuntimeError("bucket gone")), UploadPipeline())
        registry = FileRegistry(file_repository, failing, fixtures)

        with pytest.raises(UploadError, match="bucket gone"):
            await registry.resolve(["a.jpg", "b.jpg"])
        assert file_repository.records == []

    @pytest.mark.asyncio
    async def test_empty_upload_result_is_an_error(self, file_repository, fixtures):
        class NothingStored:
            async def upload(self, requests):
                return []

        registry = FileRegistry(file_repository, NothingStored(), fixtures)

        with pytest.raises(UploadError, match="no file records"):
            await registry.resolve(["logo.png"])
