"""Permission grants for the anonymous role."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database.repositories.permission_repository import SqlPermissionRepository

from .models import PUBLIC_ROLE, Role, action_name
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PermissionService:
    repository: PermissionRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "PermissionService":
        return cls(SqlPermissionRepository(session))

    async def ensure_role(self, role_type: str = PUBLIC_ROLE) -> Role:
        role = await self.repository.get_role_by_type(role_type)
        if role is None:
            role = await self.repository.create_role(
                role_type=role_type,
                name=role_type.capitalize(),
                description="Default role given to unauthenticated users." if role_type == PUBLIC_ROLE else None,
            )
            logger.info("Created role %s", role_type)
        return role

    async def grant(self, permissions: Mapping[str, Sequence[str]], role_type: str = PUBLIC_ROLE) -> list[str]:
        """Grant ``{controller: [action, ...]}`` to the role.

        Existing ``(action, role)`` pairs are left alone; the newly created
        action names are returned.
        """
        role = await self.ensure_role(role_type)
        created: list[str] = []
        for controller, actions in permissions.items():
            for action in actions:
                name = action_name(controller, action)
                if await self.repository.find_permission(name, role.id) is not None:
                    continue
                await self.repository.create_permission(action=name, role_id=role.id)
                created.append(name)
        if created:
            logger.info("Granted %s to role %s", created, role_type)
        return created

    async def is_allowed(self, controller: str, action: str, role_type: str = PUBLIC_ROLE) -> bool:
        role = await self.repository.get_role_by_type(role_type)
        if role is None:
            return False
        return await self.repository.find_permission(action_name(controller, action), role.id) is not None
