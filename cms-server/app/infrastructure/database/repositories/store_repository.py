"""SQLAlchemy implementation for the key-value store."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from app.db.models import StoreItem
from app.domain.common import AsyncRepository
from app.domain.store.models import StoreScope


class SqlStoreRepository(AsyncRepository[StoreItem]):
    async def _find(self, scope: StoreScope, key: str) -> StoreItem | None:
        stmt = select(StoreItem).where(
            StoreItem.environment == scope.environment,
            StoreItem.type == scope.type,
            StoreItem.name == scope.name,
            StoreItem.key == key,
        )
        return await self.first(stmt)

    async def get(self, scope: StoreScope, key: str) -> Any:
        item = await self._find(scope, key)
        return item.value if item else None

    async def set(self, scope: StoreScope, key: str, value: Any) -> None:
        item = await self._find(scope, key)
        if item is None:
            self.session.add(
                StoreItem(
                    environment=scope.environment,
                    type=scope.type,
                    name=scope.name,
                    key=key,
                    value=value,
                )
            )
        else:
            item.value = value
        await self.session.flush()
