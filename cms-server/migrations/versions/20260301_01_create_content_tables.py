"""create content, file, permission and store tables

Revision ID: c7d1e2f3a4b5
Revises: 
Create Date: 2026-03-01 10:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "c7d1e2f3a4b5"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "files",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("alternative_text", sa.Text()),
        sa.Column("caption", sa.Text()),
        sa.Column("ext", sa.String(length=20)),
        sa.Column("mime", sa.String(length=100)),
        sa.Column("size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("provider", sa.String(length=50), nullable=False),
        sa.Column("folder_path", sa.String(length=255), nullable=False, server_default="/"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_files_name", "files", ["name"])

    op.create_table(
        "entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("document_id", sa.String(length=36), nullable=False, unique=True),
        sa.Column("content_type", sa.String(length=50), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("published_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_entries_content_type", "entries", ["content_type"])

    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("type", sa.String(length=50), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text()),
    )

    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("action", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.Integer(), sa.ForeignKey("roles.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("action", "role_id", name="uq_permissions_action_role"),
    )
    op.create_index("ix_permissions_action", "permissions", ["action"])
    op.create_index("ix_permissions_role_id", "permissions", ["role_id"])

    op.create_table(
        "core_store",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("environment", sa.String(length=50), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.JSON()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("environment", "type", "name", "key", name="uq_core_store_scope_key"),
    )


def downgrade() -> None:
    op.drop_table("core_store")
    op.drop_index("ix_permissions_role_id", table_name="permissions")
    op.drop_index("ix_permissions_action", table_name="permissions")
    op.drop_table("permissions")
    op.drop_table("roles")
    op.drop_index("ix_entries_content_type", table_name="entries")
    op.drop_table("entries")
    op.drop_index("ix_files_name", table_name="files")
    op.drop_table("files")
