"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class UploadFile(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    alternative_text = Column(Text)
    caption = Column(Text)
    ext = Column(String(20))
    mime = Column(String(100))
    size = Column(Integer, nullable=False, default=0)
    url = Column(Text, nullable=False)
    provider = Column(String(50), nullable=False)
    folder_path = Column(String(255), nullable=False, default="/")
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Entry(Base):
    __tablename__ = "entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(String(36), unique=True, nullable=False, default=generate_uuid)
    content_type = Column(String(50), nullable=False, index=True)
    data = Column(JSON, nullable=False)
    published_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class Role(Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(50), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)

    permissions = relationship("Permission", back_populates="role", cascade="all, delete-orphan")


class Permission(Base):
    __tablename__ = "permissions"
    __table_args__ = (UniqueConstraint("action", "role_id", name="uq_permissions_action_role"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(255), nullable=False, index=True)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    role = relationship("Role", back_populates="permissions")


class StoreItem(Base):
    __tablename__ = "core_store"
    __table_args__ = (
        UniqueConstraint("environment", "type", "name", "key", name="uq_core_store_scope_key"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    environment = Column(String(50), nullable=False)
    type = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False)
    key = Column(String(100), nullable=False)
    value = Column(JSON)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
