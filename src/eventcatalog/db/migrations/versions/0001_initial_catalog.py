"""Initial catalog tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

_ACTIVE = sa.text("status = 'active'")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def _active_name_index(name: str, table: str, columns: list[str]) -> None:
    op.create_index(
        name, table, columns, unique=True,
        sqlite_where=_ACTIVE, postgresql_where=_ACTIVE,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(128), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("handle", sa.String(30), nullable=False, unique=True),
        sa.Column("hashed_password", sa.Text, nullable=True),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "projects",
        sa.Column("project_id", sa.String(128), primary_key=True),
        sa.Column("name", sa.String(45), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("is_private", sa.Boolean, nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("created_by_type", sa.String(30), nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_projects_created_by", "projects", ["created_by"])
    _active_name_index("uq_projects_name_active", "projects", ["name"])

    op.create_table(
        "servers",
        sa.Column("server_id", sa.String(128), primary_key=True),
        sa.Column("project_id", sa.String(128), sa.ForeignKey("projects.project_id"), nullable=False),
        sa.Column("name", sa.String(45), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("protocol", sa.String(30), nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_servers_project_id", "servers", ["project_id"])
    _active_name_index("uq_servers_project_name_active", "servers", ["project_id", "name"])

    op.create_table(
        "resources",
        sa.Column("resource_id", sa.String(128), primary_key=True),
        sa.Column("server_id", sa.String(128), sa.ForeignKey("servers.server_id"), nullable=False),
        sa.Column("project_id", sa.String(128), sa.ForeignKey("projects.project_id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("mode", sa.String(20), nullable=False),
        sa.Column("resource_type", sa.String(20), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_resources_server_id", "resources", ["server_id"])
    op.create_index("ix_resources_project_id", "resources", ["project_id"])
    _active_name_index("uq_resources_server_name_active", "resources", ["server_id", "name"])

    op.create_table(
        "resource_bindings",
        sa.Column("binding_id", sa.String(128), primary_key=True),
        sa.Column("source_resource_id", sa.String(128), sa.ForeignKey("resources.resource_id"), nullable=False),
        sa.Column("target_resource_id", sa.String(128), sa.ForeignKey("resources.resource_id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("source_resource_id", "target_resource_id", name="uq_resource_binding_source_target"),
    )
    op.create_index("ix_resource_bindings_source_resource_id", "resource_bindings", ["source_resource_id"])
    op.create_index("ix_resource_bindings_target_resource_id", "resource_bindings", ["target_resource_id"])

    op.create_table(
        "schemas",
        sa.Column("schema_id", sa.String(128), primary_key=True),
        sa.Column("project_id", sa.String(128), sa.ForeignKey("projects.project_id"), nullable=False),
        sa.Column("name", sa.String(45), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("schema_type", sa.String(30), nullable=False),
        sa.Column("schema_text", sa.Text, nullable=False),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("created_by_type", sa.String(30), nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_schemas_project_id", "schemas", ["project_id"])
    _active_name_index("uq_schemas_project_name_active", "schemas", ["project_id", "name"])

    op.create_table(
        "schema_versions",
        sa.Column("schema_version_id", sa.String(128), primary_key=True),
        sa.Column("schema_id", sa.String(128), sa.ForeignKey("schemas.schema_id"), nullable=False),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("schema_text", sa.Text, nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("schema_id", "version", name="uq_schema_versions_schema_version"),
    )
    op.create_index("ix_schema_versions_schema_id", "schema_versions", ["schema_id"])

    op.create_table(
        "messages",
        sa.Column("message_id", sa.String(128), primary_key=True),
        sa.Column("project_id", sa.String(128), sa.ForeignKey("projects.project_id"), nullable=False),
        sa.Column("name", sa.String(45), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("schema_id", sa.String(128), sa.ForeignKey("schemas.schema_id"), nullable=False),
        sa.Column("schema_version", sa.Integer, nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_messages_project_id", "messages", ["project_id"])
    op.create_index("ix_messages_schema_id", "messages", ["schema_id"])
    _active_name_index("uq_messages_project_name_active", "messages", ["project_id", "name"])

    op.create_table(
        "apps",
        sa.Column("app_id", sa.String(128), primary_key=True),
        sa.Column("project_id", sa.String(128), sa.ForeignKey("projects.project_id"), nullable=False),
        sa.Column("name", sa.String(45), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_apps_project_id", "apps", ["project_id"])
    _active_name_index("uq_apps_project_name_active", "apps", ["project_id", "name"])

    op.create_table(
        "app_resource_messages",
        sa.Column("link_id", sa.String(128), primary_key=True),
        sa.Column("app_id", sa.String(128), sa.ForeignKey("apps.app_id"), nullable=False),
        sa.Column("resource_id", sa.String(128), sa.ForeignKey("resources.resource_id"), nullable=False),
        sa.Column("message_id", sa.String(128), sa.ForeignKey("messages.message_id"), nullable=False),
        sa.Column("direction", sa.String(20), nullable=False),
        sa.Column("status", sa.String(30), nullable=False),
        sa.Column("created_by", sa.String(128), sa.ForeignKey("users.user_id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_app_resource_messages_app_id", "app_resource_messages", ["app_id"])
    op.create_index("ix_app_resource_messages_resource_id", "app_resource_messages", ["resource_id"])
    op.create_index("ix_app_resource_messages_message_id", "app_resource_messages", ["message_id"])


def downgrade() -> None:
    for table in (
        "app_resource_messages",
        "apps",
        "messages",
        "schema_versions",
        "schemas",
        "resource_bindings",
        "resources",
        "servers",
        "projects",
        "users",
    ):
        op.drop_table(table)
