"""Repository protocol for the persisted key-value store."""

from __future__ import annotations

from typing import Any, Protocol

from .models import StoreScope


class StoreRepository(Protocol):
    async def get(self, scope: StoreScope, key: str) -> Any:
        ...

    async def set(self, scope: StoreScope, key: str, value: Any) -> None:
        ...
