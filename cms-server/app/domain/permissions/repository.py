"""Repository protocol for roles and permissions."""

from __future__ import annotations

from typing import Protocol

from .models import Permission, Role


class PermissionRepository(Protocol):
    async def get_role_by_type(self, role_type: str) -> Role | None:
        ...

    async def create_role(self, *, role_type: str, name: str, description: str | None) -> Role:
        ...

    async def find_permission(self, action: str, role_id: int) -> Permission | None:
        ...

    async def create_permission(self, *, action: str, role_id: int) -> Permission:
        ...

    async def list_actions(self, role_id: int) -> list[str]:
        ...
