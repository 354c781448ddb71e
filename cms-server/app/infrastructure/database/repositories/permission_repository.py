"""SQLAlchemy implementation for roles and permissions."""

from __future__ import annotations

from sqlalchemy import select

from app.db.models import Permission as PermissionModel, Role as RoleModel
from app.domain.common import AsyncRepository
from app.domain.permissions.models import Permission, Role


class SqlPermissionRepository(AsyncRepository[PermissionModel]):
    async def get_role_by_type(self, role_type: str) -> Role | None:
        stmt = select(RoleModel).where(RoleModel.type == role_type)
        model = await self.first(stmt)
        return Role.from_orm(model) if model else None

    async def create_role(self, *, role_type: str, name: str, description: str | None) -> Role:
        model = RoleModel(type=role_type, name=name, description=description)
        self.session.add(model)
        await self.session.flush()
        return Role.from_orm(model)

    async def find_permission(self, action: str, role_id: int) -> Permission | None:
        stmt = select(PermissionModel).where(
            PermissionModel.action == action,
            PermissionModel.role_id == role_id,
        )
        model = await self.first(stmt)
        return Permission.from_orm(model) if model else None

    async def create_permission(self, *, action: str, role_id: int) -> Permission:
        model = await self.add(PermissionModel(action=action, role_id=role_id))
        return Permission.from_orm(model)

    async def list_actions(self, role_id: int) -> list[str]:
        stmt = select(PermissionModel.action).where(PermissionModel.role_id == role_id).order_by(PermissionModel.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
