"""
Shared fixtures for the content server tests.

Layers:
    - unit tests use the in-memory fakes below
    - repository and seeding tests run against a throwaway SQLite file
    - API tests drive the FastAPI app through httpx's ASGI transport
"""
import os
import tempfile
from itertools import count
from pathlib import Path
from typing import Any, Optional

# Settings are read on first import of the app package, so the environment
# has to point at scratch locations before anything from ``app`` is imported.
_SCRATCH = Path(tempfile.mkdtemp(prefix="cms-tests-"))
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["DATABASE__URL"] = f"sqlite+aiosqlite:///{_SCRATCH / 'cms.db'}"
os.environ["STORAGE__PROVIDER"] = "local"
os.environ["STORAGE__LOCAL_ROOT"] = str(_SCRATCH / "uploads")
os.environ["SEED__ENABLED"] = "false"

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.domain.files.models import FileRecord
from app.domain.permissions.models import Permission, Role
from app.domain.store.models import StoreScope
from app.domain.uploads import UploadPipeline, UploadService
from app.infrastructure.database.session import init_db

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


# =============================================================================
# In-memory fakes
# =============================================================================


class InMemoryFileRepository:
    def __init__(self) -> None:
        self.records: list[FileRecord] = []
        self._ids = count(1)

    def add_existing(self, name: str, url: Optional[str] = None) -> FileRecord:
        record = FileRecord(id=next(self._ids), name=name, size=1, mime="image/png", url=url or f"/uploads/{name}.png")
        self.records.append(record)
        return record

    async def find_by_name(self, name: str) -> Optional[FileRecord]:
        return next((record for record in self.records if record.name == name), None)

    async def get_by_id(self, file_id: int) -> Optional[FileRecord]:
        return next((record for record in self.records if record.id == file_id), None)

    async def list_files(self, limit: int, offset: int) -> list[FileRecord]:
        return self.records[offset:offset + limit]

    async def count_files(self) -> int:
        return len(self.records)

    async def create(self, **fields: Any) -> FileRecord:
        record = FileRecord(id=next(self._ids), **fields)
        self.records.append(record)
        return record


class RecordingProvider:
    """Upload provider that keeps every stored object in memory."""

    name = "memory"

    def __init__(self, fail_with: Optional[BaseException] = None, fail_after: int = 0) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_with = fail_with
        self.fail_after = fail_after

    async def upload(self, key: str, data: bytes, content_type: Optional[str]) -> str:
        if self.fail_with is not None and len(self.objects) >= self.fail_after:
            raise self.fail_with
        self.objects[key] = data
        return f"/uploads/{key}"

    async def delete(self, key: str) -> None:
        self.deleted.append(key)
        self.objects.pop(key, None)

    def describe(self) -> dict[str, object]:
        return {"provider": self.name}


class InMemoryStoreRepository:
    def __init__(self) -> None:
        self.values: dict[tuple[StoreScope, str], Any] = {}

    async def get(self, scope: StoreScope, key: str) -> Any:
        return self.values.get((scope, key))

    async def set(self, scope: StoreScope, key: str, value: Any) -> None:
        self.values[(scope, key)] = value


class InMemoryPermissionRepository:
    def __init__(self) -> None:
        self.roles: list[Role] = []
        self.permissions: list[Permission] = []
        self._ids = count(1)

    async def get_role_by_type(self, role_type: str) -> Optional[Role]:
        return next((role for role in self.roles if role.type == role_type), None)

    async def create_role(self, *, role_type: str, name: str, description: Optional[str]) -> Role:
        role = Role(id=next(self._ids), type=role_type, name=name, description=description)
        self.roles.append(role)
        return role

    async def find_permission(self, action: str, role_id: int) -> Optional[Permission]:
        return next(
            (item for item in self.permissions if item.action == action and item.role_id == role_id),
            None,
        )

    async def create_permission(self, *, action: str, role_id: int) -> Permission:
        permission = Permission(id=next(self._ids), action=action, role_id=role_id)
        self.permissions.append(permission)
        return permission

    async def list_actions(self, role_id: int) -> list[str]:
        return [item.action for item in self.permissions if item.role_id == role_id]


class InMemoryEntryRepository:
    def __init__(self, fail_on: Optional[set[str]] = None) -> None:
        self.created: list[tuple[str, dict[str, Any]]] = []
        self.fail_on = fail_on or set()

    async def create(self, *, content_type: str, data: dict[str, Any], published_at) -> dict[str, Any]:
        label = data.get("slug") or data.get("name") or data.get("title")
        if label in self.fail_on:
            raise RuntimeError(f"cannot store {label}")
        self.created.append((content_type, data))
        return data

    def of_type(self, content_type: str) -> list[dict[str, Any]]:
        return [data for kind, data in self.created if kind == content_type]


class CountingUnitOfWork:
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def file_repository() -> InMemoryFileRepository:
    return InMemoryFileRepository()


@pytest.fixture
def provider() -> RecordingProvider:
    return RecordingProvider()


@pytest.fixture
def upload_service(file_repository, provider) -> UploadService:
    return UploadService(file_repository, provider, UploadPipeline())


@pytest.fixture
def store_repository() -> InMemoryStoreRepository:
    return InMemoryStoreRepository()


@pytest.fixture
def permission_repository() -> InMemoryPermissionRepository:
    return InMemoryPermissionRepository()


@pytest.fixture
def unit_of_work() -> CountingUnitOfWork:
    return CountingUnitOfWork()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session
