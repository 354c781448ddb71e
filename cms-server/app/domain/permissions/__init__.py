"""Permission domain exports."""

from .models import PUBLIC_ROLE, UPLOAD_PERMISSIONS, Permission, Role, action_name
from .repository import PermissionRepository

__all__ = ["PUBLIC_ROLE", "Permission", "PermissionRepository", "Role", "UPLOAD_PERMISSIONS", "action_name"]
