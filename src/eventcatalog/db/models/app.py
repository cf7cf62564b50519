"""App and app-resource-message link tables."""

from sqlalchemy import ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from eventcatalog.db.base import STATUS_ACTIVE, Base, TimestampMixin


class AppRow(Base, TimestampMixin):
    __tablename__ = "apps"

    app_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(45), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=STATUS_ACTIVE)
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)

    __table_args__ = (
        Index(
            "uq_apps_project_name_active",
            "project_id",
            "name",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )


class AppResourceMessageRow(Base, TimestampMixin):
    """An app sends or receives a message through a resource."""

    __tablename__ = "app_resource_messages"

    link_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    app_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("apps.app_id"), nullable=False, index=True
    )
    resource_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("resources.resource_id"), nullable=False, index=True
    )
    message_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("messages.message_id"), nullable=False, index=True
    )
    direction: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=STATUS_ACTIVE)
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)
