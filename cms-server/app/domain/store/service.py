"""Scoped access to the key-value store and the one-time-run flag."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models import StoreScope
from .repository import StoreRepository

SETUP_FLAG_KEY = "initHasRun"


@dataclass(slots=True)
class ScopedStore:
    repository: StoreRepository
    scope: StoreScope

    async def get(self, key: str) -> Any:
        return await self.repository.get(self.scope, key)

    async def set(self, key: str, value: Any) -> None:
        await self.repository.set(self.scope, key, value)


@dataclass(slots=True)
class OneTimeRunFlag:
    """Persisted marker that a setup step already ran for an environment."""

    store: ScopedStore
    key: str = SETUP_FLAG_KEY

    @classmethod
    def for_environment(cls, repository: StoreRepository, environment: str) -> "OneTimeRunFlag":
        return cls(ScopedStore(repository, StoreScope(environment=environment, type="type", name="setup")))

    async def claim(self) -> bool:
        """Read the flag and set it; True only for the first caller."""
        has_run = await self.store.get(self.key)
        await self.store.set(self.key, True)
        return not has_run
