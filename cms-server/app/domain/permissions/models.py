"""Role and permission domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.db import models as orm

PUBLIC_ROLE = "public"

# Not part of the seeded grants; see ``seed.py --grant-uploads``.
UPLOAD_PERMISSIONS: dict[str, list[str]] = {"upload": ["upload", "find", "findOne"]}


def action_name(controller: str, action: str) -> str:
    """Fully qualified action, e.g. ``api::article.article.find``."""
    return f"api::{controller}.{controller}.{action}"


@dataclass(slots=True, frozen=True)
class Role:
    id: int
    type: str
    name: str
    description: Optional[str] = None

    @classmethod
    def from_orm(cls, instance: orm.Role) -> "Role":
        return cls(id=instance.id, type=instance.type, name=instance.name, description=instance.description)


@dataclass(slots=True, frozen=True)
class Permission:
    id: int
    action: str
    role_id: int

    @classmethod
    def from_orm(cls, instance: orm.Permission) -> "Permission":
        return cls(id=instance.id, action=instance.action, role_id=instance.role_id)
