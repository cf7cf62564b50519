"""Server and resource tables."""

from sqlalchemy import ForeignKey, Index, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from eventcatalog.db.base import STATUS_ACTIVE, Base, TimestampMixin


class ServerRow(Base, TimestampMixin):
    __tablename__ = "servers"

    server_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(45), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    protocol: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=STATUS_ACTIVE)
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)

    __table_args__ = (
        Index(
            "uq_servers_project_name_active",
            "project_id",
            "name",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )


class ResourceRow(Base, TimestampMixin):
    __tablename__ = "resources"

    resource_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    server_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("servers.server_id"), nullable=False, index=True
    )
    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    mode: Mapped[str] = mapped_column(String(20), nullable=False)
    resource_type: Mapped[str] = mapped_column(String(20), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=STATUS_ACTIVE)
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)

    __table_args__ = (
        Index(
            "uq_resources_server_name_active",
            "server_id",
            "name",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )


class ResourceBindingRow(Base, TimestampMixin):
    __tablename__ = "resource_bindings"

    binding_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    source_resource_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("resources.resource_id"), nullable=False, index=True
    )
    target_resource_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("resources.resource_id"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint(
            "source_resource_id", "target_resource_id",
            name="uq_resource_binding_source_target",
        ),
    )
