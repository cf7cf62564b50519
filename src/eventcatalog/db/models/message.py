"""Message table."""

from sqlalchemy import ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from eventcatalog.db.base import STATUS_ACTIVE, Base, TimestampMixin


class MessageRow(Base, TimestampMixin):
    __tablename__ = "messages"

    message_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(45), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    schema_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("schemas.schema_id"), nullable=False, index=True
    )
    # Pinned; later schema edits do not move it
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default=STATUS_ACTIVE)
    created_by: Mapped[str] = mapped_column(String(128), ForeignKey("users.user_id"), nullable=False)

    __table_args__ = (
        Index(
            "uq_messages_project_name_active",
            "project_id",
            "name",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )
